"""
Storage adapter contract.

The consolidator reads current state and commits every accepted
interaction through an adapter, so any backend implementing this
contract can be plugged in without engine changes.

Each update_* method receives the mutated working copy, the stored
record it was derived from, and the block of the triggering remark.
The engine calls every update at most once per remark and awaits it
before moving on; durability and atomicity belong to the adapter.
Adapters shared between concurrent consolidation runs must serialize
access themselves.
"""

from typing import Protocol, runtime_checkable

from rmrk_consolidator.models.collection import Collection, CollectionConsolidated
from rmrk_consolidator.models.nft import NFT, NFTConsolidated


class ConsolidatorAdapter(Protocol):
    """Capabilities the consolidator requires from a storage backend."""

    async def get_collection_by_id(self, id: str) -> CollectionConsolidated | None: ...

    async def get_nft_by_id(self, id: str) -> NFTConsolidated | None:
        """Lenient lookup used by EMOTE; may return the first of several matches."""
        ...

    async def get_nft_by_id_unique(self, id: str) -> NFTConsolidated | None:
        """Strict lookup used by every other interaction."""
        ...

    async def get_collection_nft_count(self, collection_id: str) -> int: ...

    async def update_collection_mint(self, collection: Collection) -> None: ...

    async def update_collection_issuer(
        self, collection: Collection, consolidated: CollectionConsolidated, block: int
    ) -> None: ...

    async def update_nft_mint(self, nft: NFT, block: int) -> None: ...

    async def update_nft_send(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None: ...

    async def update_nft_list(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None: ...

    async def update_nft_buy(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None: ...

    async def update_nft_consume(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None: ...

    async def update_nft_emote(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None: ...


@runtime_checkable
class SnapshotReader(Protocol):
    """
    Optional bulk readers for assembling the final snapshot.

    Write-only adapters (whose state is read elsewhere) omit these and
    the consolidator returns empty NFT and collection lists.
    """

    async def get_all_nfts(self) -> list[NFTConsolidated]: ...

    async def get_all_collections(self) -> list[CollectionConsolidated]: ...
