"""
Outcome types for consolidation.

Parsers return Parsed | ParseFailure, validators return Rejection | None.
Neither raises for bad input: a malformed or disallowed remark is an
expected outcome that ends up in the invalid-call ledger.

INVARIANT: The invalid-call ledger is append-only.
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from rmrk_consolidator.models.collection import CollectionConsolidated
from rmrk_consolidator.models.nft import NFTConsolidated

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """Successful parse carrying the typed entity."""

    value: T


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Remark was malformed for its declared interaction."""

    message: str


ParseResult: TypeAlias = Parsed[T] | ParseFailure


@dataclass(frozen=True, slots=True)
class Rejection:
    """A well-formed interaction that violates protocol rules."""

    message: str


@dataclass(frozen=True, slots=True)
class InvalidCall:
    """
    A rejected remark.

    Attributes:
        op_type: Interaction kind of the remark
        block: Block of the remark
        caller: Signer of the remark
        object_id: Target entity id, or the raw remark when parsing failed
        message: Why the remark was rejected
    """

    op_type: str
    block: int
    caller: str
    object_id: str
    message: str


class ConsolidationSnapshot(BaseModel):
    """Final state returned by a consolidation run."""

    model_config = ConfigDict(frozen=True)

    nfts: list[NFTConsolidated] = Field(
        default_factory=list,
        description="All NFTs known to the adapter after the run",
    )
    collections: list[CollectionConsolidated] = Field(
        default_factory=list,
        description="All collections known to the adapter after the run",
    )
    invalid: list[InvalidCall] = Field(
        default_factory=list,
        description="Rejected remarks in processing order",
    )
    changes: list[dict[str, str]] | None = Field(
        default=None,
        description="Applied interactions as {op_type: id}, when enabled",
    )
    last_block: int | None = Field(
        default=None,
        description="Block of the last remark consumed",
    )
