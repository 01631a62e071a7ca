from dataclasses import dataclass, field

from rmrk_consolidator.models.change import Change


@dataclass
class Collection:
    """
    Working copy of a collection during one interaction.

    The issuer is the only attribute that changes after minting
    (via CHANGEISSUER). Collections are never deleted.

    Attributes:
        block: Block the collection was minted in
        name: Display name
        max: Item cap, 0 means unbounded
        issuer: Address currently allowed to mint items
        symbol: Ticker-like symbol, part of the id
        id: "<pubkey fragment>-<SYMBOL>"
        metadata: Metadata URI
    """

    block: int
    name: str
    max: int
    issuer: str
    symbol: str
    id: str
    metadata: str
    changes: list[Change] = field(default_factory=list)

    def add_change(self, change: Change) -> None:
        """Append to the audit trail."""
        self.changes.append(change)

    @staticmethod
    def generate_id(pubkey: str, symbol: str) -> str:
        """
        Build a collection id from the issuer's hex public key and a symbol.

        Raises ValueError if pubkey is not 0x-prefixed hex.
        """
        if not pubkey.startswith("0x"):
            msg = "This is not a valid pubkey"
            raise ValueError(msg)
        return pubkey[2:12] + pubkey[-8:] + "-" + symbol.upper()


@dataclass
class CollectionConsolidated:
    """A collection as persisted by a storage adapter."""

    block: int
    name: str
    max: int
    issuer: str
    symbol: str
    id: str
    metadata: str
    changes: list[Change] = field(default_factory=list)
    updated_at_block: int | None = None


def collection_to_instance(
    consolidated: CollectionConsolidated | None,
) -> Collection | None:
    """Convert a stored collection into a detached working copy."""
    if consolidated is None:
        return None
    return Collection(
        block=consolidated.block,
        name=consolidated.name,
        max=consolidated.max,
        issuer=consolidated.issuer,
        symbol=consolidated.symbol,
        id=consolidated.id,
        metadata=consolidated.metadata,
        changes=list(consolidated.changes),
    )


def collection_to_record(collection: Collection, block: int | None = None) -> CollectionConsolidated:
    """Convert a working copy into a storable record."""
    return CollectionConsolidated(
        block=collection.block,
        name=collection.name,
        max=collection.max,
        issuer=collection.issuer,
        symbol=collection.symbol,
        id=collection.id,
        metadata=collection.metadata,
        changes=list(collection.changes),
        updated_at_block=block if block is not None else collection.block,
    )
