from dataclasses import dataclass, field

from rmrk_consolidator.models.change import Change

# Reaction unicode -> addresses that reacted, in reaction order
Reactions = dict[str, list[str]]


@dataclass
class NFT:
    """
    Working copy of an NFT during one interaction.

    Once `burned` is non-empty the NFT is terminal: every further
    SEND, LIST, BUY, CONSUME and EMOTE is rejected.

    Attributes:
        block: Block the NFT was minted in
        collection: Owning collection id (immutable)
        name: Display name
        instance: Instance symbol, part of the id
        transferable: 1 if the NFT may change hands, 0 otherwise
        sn: Zero-padded serial number within the collection
        metadata: Metadata URI
        data: Optional inline data
        owner: Current holder
        forsale: Listing price in planck, 0 when not listed
        reactions: Emote reactions
        burned: Burn reason, empty while alive
    """

    block: int
    collection: str
    name: str
    instance: str
    transferable: int
    sn: str
    metadata: str | None = None
    data: str | None = None
    owner: str = ""
    forsale: int = 0
    reactions: Reactions = field(default_factory=dict)
    burned: str = ""
    changes: list[Change] = field(default_factory=list)

    @property
    def id(self) -> str:
        return f"{self.block}-{self.collection}-{self.instance}-{self.sn}"

    def add_change(self, change: Change) -> None:
        """Append to the audit trail."""
        self.changes.append(change)


@dataclass
class NFTConsolidated:
    """An NFT as persisted by a storage adapter."""

    id: str
    block: int
    collection: str
    name: str
    instance: str
    transferable: int
    sn: str
    metadata: str | None = None
    data: str | None = None
    owner: str = ""
    forsale: int = 0
    reactions: Reactions = field(default_factory=dict)
    burned: str = ""
    changes: list[Change] = field(default_factory=list)
    updated_at_block: int | None = None


def copy_reactions(reactions: Reactions) -> Reactions:
    return {unicode: list(addresses) for unicode, addresses in reactions.items()}


def nft_to_instance(consolidated: NFTConsolidated | None) -> NFT | None:
    """Convert a stored NFT into a detached working copy."""
    if consolidated is None:
        return None
    return NFT(
        block=consolidated.block,
        collection=consolidated.collection,
        name=consolidated.name,
        instance=consolidated.instance,
        transferable=consolidated.transferable,
        sn=consolidated.sn,
        metadata=consolidated.metadata,
        data=consolidated.data,
        owner=consolidated.owner,
        forsale=consolidated.forsale,
        reactions=copy_reactions(consolidated.reactions),
        burned=consolidated.burned,
        changes=list(consolidated.changes),
    )


def nft_to_record(nft: NFT, block: int | None = None) -> NFTConsolidated:
    """Convert a working copy into a storable record."""
    return NFTConsolidated(
        id=nft.id,
        block=nft.block,
        collection=nft.collection,
        name=nft.name,
        instance=nft.instance,
        transferable=nft.transferable,
        sn=nft.sn,
        metadata=nft.metadata,
        data=nft.data,
        owner=nft.owner,
        forsale=nft.forsale,
        reactions=copy_reactions(nft.reactions),
        burned=nft.burned,
        changes=list(nft.changes),
        updated_at_block=block if block is not None else nft.block,
    )
