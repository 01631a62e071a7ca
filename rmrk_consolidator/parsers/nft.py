"""
Parser for MINTNFT remarks.

Format:
    RMRK::MINTNFT::1.0.0::<uri-encoded JSON>

Example payload:
    {"collection": "0aff6865bed3a66b-KANF", "name": "Founder #1",
     "instance": "KANF1", "transferable": 1, "sn": "0000000000000001",
     "metadata": "ipfs://ipfs/Qm..."}

The NFT id embeds the mint block: <block>-<collection>-<instance>-<sn>.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType
from rmrk_consolidator.models.result import Parsed, ParseFailure, ParseResult
from rmrk_consolidator.parsers.remark import (
    RemarkFormatError,
    decode_json_payload,
    describe_validation_error,
    split_remark,
)


class NFTPayload(BaseModel):
    """JSON body of a MINTNFT remark."""

    model_config = ConfigDict(extra="ignore")

    collection: str = Field(..., min_length=1)
    name: str
    instance: str = Field(..., min_length=1, pattern=r"^\S+$")
    transferable: Literal[0, 1]
    sn: str = Field(..., pattern=r"^\d+$")
    metadata: str | None = None
    data: str | None = None

    @field_validator("transferable", mode="before")
    @classmethod
    def coerce_transferable(cls, value: object) -> object:
        # Older minting tools wrote "0"/"1" strings
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value


def parse_nft(remark: str, block: int) -> ParseResult[NFT]:
    """
    Parse a MINTNFT remark into an NFT minted at `block`.

    The owner is left empty; it is set to the collection issuer once the
    mint is validated.
    """
    try:
        (data,) = split_remark(remark, OpType.MINTNFT, 1)
        payload = NFTPayload.model_validate(decode_json_payload(data))
    except RemarkFormatError as e:
        return ParseFailure(str(e))
    except ValidationError as e:
        return ParseFailure(describe_validation_error(e))

    return Parsed(
        NFT(
            block=block,
            collection=payload.collection,
            name=payload.name,
            instance=payload.instance,
            transferable=payload.transferable,
            sn=payload.sn,
            metadata=payload.metadata,
            data=payload.data,
        )
    )
