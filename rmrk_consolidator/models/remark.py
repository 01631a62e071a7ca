"""
Remark input records.

A remark is one immutable log entry extracted upstream from a block:
who signed it, in which block, and the raw RMRK payload string.
"""

from dataclasses import dataclass, field
from enum import Enum

from rmrk_consolidator.config import REMARK_PREFIX, REMARK_SEPARATOR


class OpType(str, Enum):
    """RMRK 1.0.0 interaction kinds."""

    MINT = "MINT"
    MINTNFT = "MINTNFT"
    SEND = "SEND"
    LIST = "LIST"
    BUY = "BUY"
    CONSUME = "CONSUME"
    EMOTE = "EMOTE"
    CHANGEISSUER = "CHANGEISSUER"

    @classmethod
    def from_value(cls, value: "OpType | str") -> "OpType | None":
        """Resolve a raw interaction type, or None when unsupported."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class BlockCall:
    """
    A sibling call batched with the remark in the same extrinsic.

    Attributes:
        call: Pallet call name (e.g., "balances.transfer", "system.remark")
        value: Call arguments as a string ("dest,amount" for transfers)
        caller: Signer of the batch
    """

    call: str
    value: str
    caller: str = ""


@dataclass(frozen=True, slots=True)
class Remark:
    """
    A single signed remark in block order.

    Attributes:
        block: Block number the remark was included in
        caller: Address of the signer
        interaction_type: Operation kind (unknown kinds are kept as raw strings)
        remark: Raw remark payload, e.g. "RMRK::SEND::1.0.0::<id>::<recipient>"
        extra_ex: Other calls from the same batch
    """

    block: int
    caller: str
    interaction_type: OpType | str
    remark: str
    extra_ex: tuple[BlockCall, ...] = field(default_factory=tuple)

    @classmethod
    def from_text(
        cls,
        block: int,
        caller: str,
        remark: str,
        extra_ex: tuple[BlockCall, ...] = (),
    ) -> "Remark":
        """Build a remark, taking the interaction type from its RMRK header."""
        return cls(
            block=block,
            caller=caller,
            interaction_type=interaction_type_of(remark),
            remark=remark,
            extra_ex=tuple(extra_ex),
        )


def interaction_type_of(remark: str) -> OpType | str:
    """
    Read the interaction type from a raw remark.

    Returns the OpType when recognised, otherwise the raw type segment
    (empty string when the remark has no RMRK header at all).
    """
    parts = remark.split(REMARK_SEPARATOR)
    if len(parts) < 2 or parts[0] != REMARK_PREFIX:
        return ""
    op_type = OpType.from_value(parts[1])
    return op_type if op_type is not None else parts[1]
