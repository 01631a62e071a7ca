"""
Relational storage adapter.

Persists consolidated state through an AsyncSession. Writes are flushed
so later remarks in the same run read them back; committing (or rolling
back) the session is the caller's decision.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from rmrk_consolidator.db import operations
from rmrk_consolidator.models.collection import (
    Collection,
    CollectionConsolidated,
    collection_to_record,
)
from rmrk_consolidator.models.nft import NFT, NFTConsolidated, copy_reactions, nft_to_record


class SqlAlchemyAdapter:
    """ConsolidatorAdapter and SnapshotReader over SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_collection_by_id(self, id: str) -> CollectionConsolidated | None:
        collection = await operations.get_collection(self.session, id)
        return operations.collection_to_model(collection) if collection else None

    async def get_nft_by_id(self, id: str) -> NFTConsolidated | None:
        nft = await operations.find_nft(self.session, id)
        return operations.nft_to_model(nft) if nft else None

    async def get_nft_by_id_unique(self, id: str) -> NFTConsolidated | None:
        nft = await operations.get_nft(self.session, id)
        return operations.nft_to_model(nft) if nft else None

    async def get_collection_nft_count(self, collection_id: str) -> int:
        return await operations.count_collection_nfts(self.session, collection_id)

    async def get_all_nfts(self) -> list[NFTConsolidated]:
        return [operations.nft_to_model(nft) for nft in await operations.list_nfts(self.session)]

    async def get_all_collections(self) -> list[CollectionConsolidated]:
        return [
            operations.collection_to_model(collection)
            for collection in await operations.list_collections(self.session)
        ]

    async def update_collection_mint(self, collection: Collection) -> None:
        await operations.create_collection(self.session, collection_to_record(collection))

    async def update_collection_issuer(
        self, collection: Collection, consolidated: CollectionConsolidated, block: int
    ) -> None:
        await operations.update_collection(
            self.session,
            consolidated.id,
            issuer=collection.issuer,
            changes=operations.changes_to_json(collection.changes),
            updated_at_block=block,
        )

    async def update_nft_mint(self, nft: NFT, block: int) -> None:
        await operations.create_nft(self.session, nft_to_record(nft, block))

    async def update_nft_send(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        await operations.update_nft(
            self.session,
            consolidated.id,
            owner=nft.owner,
            forsale=str(nft.forsale),
            changes=operations.changes_to_json(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_list(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        await operations.update_nft(
            self.session,
            consolidated.id,
            forsale=str(nft.forsale),
            changes=operations.changes_to_json(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_buy(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        await operations.update_nft(
            self.session,
            consolidated.id,
            owner=nft.owner,
            forsale=str(nft.forsale),
            changes=operations.changes_to_json(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_consume(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        await operations.update_nft(
            self.session,
            consolidated.id,
            burned=nft.burned,
            forsale=str(nft.forsale),
            changes=operations.changes_to_json(nft.changes),
            updated_at_block=block,
        )

    async def update_nft_emote(self, nft: NFT, consolidated: NFTConsolidated, block: int) -> None:
        await operations.update_nft(
            self.session,
            consolidated.id,
            reactions=copy_reactions(nft.reactions),
            changes=operations.changes_to_json(nft.changes),
            updated_at_block=block,
        )
