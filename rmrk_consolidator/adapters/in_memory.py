"""
In-process storage adapter.

Default adapter for the consolidator. State lives in dicts keyed by id
and is lost with the instance. Every update writes only the fields its
interaction can change, plus `updated_at_block`.
"""

from dataclasses import replace

from rmrk_consolidator.models.collection import (
    Collection,
    CollectionConsolidated,
    collection_to_record,
)
from rmrk_consolidator.models.nft import NFT, NFTConsolidated, copy_reactions, nft_to_record


class InMemoryAdapter:
    """Dict-backed ConsolidatorAdapter and SnapshotReader."""

    def __init__(self) -> None:
        self.nfts: dict[str, NFTConsolidated] = {}
        self.collections: dict[str, CollectionConsolidated] = {}
        self._collection_nft_counts: dict[str, int] = {}

    # --- Reads ---

    async def get_collection_by_id(self, id: str) -> CollectionConsolidated | None:
        return self.collections.get(id)

    async def get_nft_by_id(self, id: str) -> NFTConsolidated | None:
        return self.nfts.get(id)

    async def get_nft_by_id_unique(self, id: str) -> NFTConsolidated | None:
        # Dict keys are unique, so both lookups coincide here
        return self.nfts.get(id)

    async def get_collection_nft_count(self, collection_id: str) -> int:
        return self._collection_nft_counts.get(collection_id, 0)

    async def get_all_nfts(self) -> list[NFTConsolidated]:
        return list(self.nfts.values())

    async def get_all_collections(self) -> list[CollectionConsolidated]:
        return list(self.collections.values())

    # --- Collection writes ---

    async def update_collection_mint(self, collection: Collection) -> None:
        self.collections[collection.id] = collection_to_record(collection)

    async def update_collection_issuer(
        self, collection: Collection, consolidated: CollectionConsolidated, block: int
    ) -> None:
        self.collections[consolidated.id] = replace(
            self.collections[consolidated.id],
            issuer=collection.issuer,
            changes=list(collection.changes),
            updated_at_block=block,
        )

    # --- NFT writes ---

    async def update_nft_mint(self, nft: NFT, block: int) -> None:
        self.nfts[nft.id] = nft_to_record(nft, block)
        self._collection_nft_counts[nft.collection] = (
            self._collection_nft_counts.get(nft.collection, 0) + 1
        )

    async def update_nft_send(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        self.nfts[consolidated.id] = replace(
            self.nfts[consolidated.id],
            owner=nft.owner,
            forsale=nft.forsale,
            changes=list(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_list(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        self.nfts[consolidated.id] = replace(
            self.nfts[consolidated.id],
            forsale=nft.forsale,
            changes=list(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_buy(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        self.nfts[consolidated.id] = replace(
            self.nfts[consolidated.id],
            owner=nft.owner,
            forsale=nft.forsale,
            changes=list(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_consume(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        self.nfts[consolidated.id] = replace(
            self.nfts[consolidated.id],
            burned=nft.burned,
            forsale=nft.forsale,
            changes=list(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_emote(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        self.nfts[consolidated.id] = replace(
            self.nfts[consolidated.id],
            reactions=copy_reactions(nft.reactions),
            changes=list(nft.changes),
            updated_at_block=block,
        )
