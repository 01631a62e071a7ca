"""
Parser for MINT (collection creation) remarks.

Format:
    RMRK::MINT::1.0.0::<uri-encoded JSON>

Example payload:
    {"name": "Kanaria Founders", "max": 100, "issuer": "H9eSv...",
     "symbol": "KANF", "id": "0aff6865bed3a66b-KANF",
     "metadata": "ipfs://ipfs/Qm..."}
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rmrk_consolidator.models.collection import Collection
from rmrk_consolidator.models.remark import OpType
from rmrk_consolidator.models.result import Parsed, ParseFailure, ParseResult
from rmrk_consolidator.parsers.remark import (
    RemarkFormatError,
    decode_json_payload,
    describe_validation_error,
    split_remark,
)


class CollectionPayload(BaseModel):
    """JSON body of a MINT remark."""

    model_config = ConfigDict(extra="ignore")

    name: str
    max: int = Field(..., ge=0)
    issuer: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1, pattern=r"^\S+$")
    id: str = Field(..., pattern=r"^\w+-\S+$")
    metadata: str = ""


def parse_collection(remark: str, block: int) -> ParseResult[Collection]:
    """
    Parse a MINT remark into a Collection minted at `block`.

    Returns:
        Parsed(Collection) or ParseFailure describing what was wrong.
    """
    try:
        (data,) = split_remark(remark, OpType.MINT, 1)
        payload = CollectionPayload.model_validate(decode_json_payload(data))
    except RemarkFormatError as e:
        return ParseFailure(str(e))
    except ValidationError as e:
        return ParseFailure(describe_validation_error(e))

    return Parsed(
        Collection(
            block=block,
            name=payload.name,
            max=payload.max,
            issuer=payload.issuer,
            symbol=payload.symbol,
            id=payload.id,
            metadata=payload.metadata,
        )
    )
