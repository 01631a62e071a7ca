"""
Shared remark grammar.

RMRK 1.0.0 remarks look like:
    RMRK::<OP_TYPE>::1.0.0::<arg>[::<arg>...]

MINT and MINTNFT carry a single URI-encoded JSON argument; the other
interactions carry plain positional arguments.
"""

import json
from typing import Any
from urllib.parse import unquote

from pydantic import ValidationError

from rmrk_consolidator.config import REMARK_PREFIX, REMARK_SEPARATOR, REMARK_VERSION
from rmrk_consolidator.models.remark import OpType


class RemarkFormatError(ValueError):
    """Raised internally when a remark does not match the grammar."""


def split_remark(remark: str, op_type: OpType, min_args: int, max_args: int | None = None) -> list[str]:
    """
    Validate the RMRK header and return the positional arguments.

    Args:
        remark: Raw remark string
        op_type: Interaction the remark claims to be
        min_args: Required number of arguments after the version
        max_args: Maximum number of arguments (defaults to min_args)

    Raises:
        RemarkFormatError: If the header or argument count is wrong
    """
    max_args = min_args if max_args is None else max_args
    parts = remark.split(REMARK_SEPARATOR)

    if len(parts) < 3:
        msg = f"Invalid remark, missing header: {remark}"
        raise RemarkFormatError(msg)

    prefix, remark_op, version, *args = parts
    if prefix != REMARK_PREFIX:
        msg = f"Invalid remark prefix '{prefix}', expected {REMARK_PREFIX}"
        raise RemarkFormatError(msg)
    if remark_op != op_type.value:
        msg = f"Invalid interaction '{remark_op}', expected {op_type.value}"
        raise RemarkFormatError(msg)
    if version != REMARK_VERSION:
        msg = f"Unsupported version '{version}', expected {REMARK_VERSION}"
        raise RemarkFormatError(msg)

    if len(args) < min_args or len(args) > max_args:
        expected = str(min_args) if min_args == max_args else f"{min_args}-{max_args}"
        msg = f"Expected {expected} argument(s), got {len(args)}"
        raise RemarkFormatError(msg)

    for arg in args[:min_args]:
        if not arg:
            msg = "Empty argument in remark"
            raise RemarkFormatError(msg)

    return args


def decode_json_payload(data: str) -> dict[str, Any]:
    """
    Decode a URI-encoded JSON object argument.

    Raises:
        RemarkFormatError: If the payload is not a JSON object
    """
    try:
        decoded = json.loads(unquote(data))
    except json.JSONDecodeError as e:
        msg = f"Payload is not valid JSON: {e.msg}"
        raise RemarkFormatError(msg) from e

    if not isinstance(decoded, dict):
        msg = "Payload is not a JSON object"
        raise RemarkFormatError(msg)

    return decoded


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "payload"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)
