"""
Database CRUD operations.

Provides async functions for reading and writing consolidated
collections and NFTs, plus conversions to the consolidated dataclasses.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rmrk_consolidator.models.change import Change
from rmrk_consolidator.models.collection import CollectionConsolidated
from rmrk_consolidator.models.db import NFTDB, CollectionDB
from rmrk_consolidator.models.nft import NFTConsolidated, copy_reactions

# --- Collection Operations ---


async def get_collection(session: AsyncSession, collection_id: str) -> CollectionDB | None:
    """
    Get a collection by id.

    Returns None if no collection exists with this id.
    """
    result = await session.execute(select(CollectionDB).where(CollectionDB.id == collection_id))
    return result.scalar_one_or_none()


async def create_collection(session: AsyncSession, record: CollectionConsolidated) -> CollectionDB:
    """
    Insert a newly minted collection.

    Raises IntegrityError on flush if the id already exists.
    """
    collection = CollectionDB(
        id=record.id,
        block=record.block,
        name=record.name,
        max=record.max,
        issuer=record.issuer,
        symbol=record.symbol,
        metadata_uri=record.metadata,
        changes=changes_to_json(record.changes),
        updated_at_block=record.updated_at_block,
    )
    session.add(collection)
    await session.flush()
    return collection


async def update_collection(
    session: AsyncSession, collection_id: str, **values: Any
) -> CollectionDB:
    """
    Overwrite columns of an existing collection.

    Raises LookupError if the collection is missing.
    """
    collection = await get_collection(session, collection_id)
    if collection is None:
        msg = f"Collection {collection_id} not found"
        raise LookupError(msg)

    for column, value in values.items():
        setattr(collection, column, value)

    await session.flush()
    return collection


async def list_collections(session: AsyncSession) -> list[CollectionDB]:
    """All collections in mint order."""
    result = await session.execute(select(CollectionDB).order_by(CollectionDB.block, CollectionDB.id))
    return list(result.scalars().all())


def collection_to_model(collection: CollectionDB) -> CollectionConsolidated:
    """Convert a database collection to a consolidated record."""
    return CollectionConsolidated(
        block=collection.block,
        name=collection.name,
        max=collection.max,
        issuer=collection.issuer,
        symbol=collection.symbol,
        id=collection.id,
        metadata=collection.metadata_uri,
        changes=changes_from_json(collection.changes),
        updated_at_block=collection.updated_at_block,
    )


# --- NFT Operations ---


async def get_nft(session: AsyncSession, nft_id: str) -> NFTDB | None:
    """
    Get exactly one NFT by id.

    Raises MultipleResultsFound if the id is ambiguous.
    """
    result = await session.execute(select(NFTDB).where(NFTDB.id == nft_id))
    return result.scalar_one_or_none()


async def find_nft(session: AsyncSession, nft_id: str) -> NFTDB | None:
    """Get the first NFT matching an id, tolerating duplicates."""
    result = await session.execute(select(NFTDB).where(NFTDB.id == nft_id).limit(1))
    return result.scalars().first()


async def count_collection_nfts(session: AsyncSession, collection_id: str) -> int:
    """Number of NFTs ever minted into a collection, burned ones included."""
    result = await session.execute(
        select(func.count()).select_from(NFTDB).where(NFTDB.collection == collection_id)
    )
    return int(result.scalar_one())


async def create_nft(session: AsyncSession, record: NFTConsolidated) -> NFTDB:
    """
    Insert a newly minted NFT.

    Raises IntegrityError on flush if the id already exists.
    """
    nft = NFTDB(
        id=record.id,
        block=record.block,
        collection=record.collection,
        name=record.name,
        instance=record.instance,
        transferable=record.transferable,
        sn=record.sn,
        metadata_uri=record.metadata,
        data=record.data,
        owner=record.owner,
        forsale=str(record.forsale),
        reactions=copy_reactions(record.reactions),
        burned=record.burned,
        changes=changes_to_json(record.changes),
        updated_at_block=record.updated_at_block,
    )
    session.add(nft)
    await session.flush()
    return nft


async def update_nft(session: AsyncSession, nft_id: str, **values: Any) -> NFTDB:
    """
    Overwrite columns of an existing NFT.

    Raises LookupError if the NFT is missing.
    """
    nft = await get_nft(session, nft_id)
    if nft is None:
        msg = f"NFT {nft_id} not found"
        raise LookupError(msg)

    for column, value in values.items():
        setattr(nft, column, value)

    await session.flush()
    return nft


async def list_nfts(session: AsyncSession) -> list[NFTDB]:
    """All NFTs in mint order."""
    result = await session.execute(select(NFTDB).order_by(NFTDB.block, NFTDB.id))
    return list(result.scalars().all())


def nft_to_model(nft: NFTDB) -> NFTConsolidated:
    """Convert a database NFT to a consolidated record."""
    return NFTConsolidated(
        id=nft.id,
        block=nft.block,
        collection=nft.collection,
        name=nft.name,
        instance=nft.instance,
        transferable=nft.transferable,
        sn=nft.sn,
        metadata=nft.metadata_uri,
        data=nft.data,
        owner=nft.owner,
        forsale=int(nft.forsale),
        reactions=copy_reactions(nft.reactions or {}),
        burned=nft.burned,
        changes=changes_from_json(nft.changes),
        updated_at_block=nft.updated_at_block,
    )


# --- Audit trail serialization ---


def changes_to_json(changes: list[Change]) -> list[dict[str, Any]]:
    # forsale values are u128; keep them as strings in JSON
    return [
        {**change.to_dict(), "old": _json_value(change.old), "new": _json_value(change.new)}
        for change in changes
    ]


def changes_from_json(data: list[dict[str, Any]] | None) -> list[Change]:
    changes = []
    for entry in data or []:
        change = Change.from_dict(entry)
        if change.field == "forsale":
            change = Change(
                field=change.field,
                old=int(change.old),
                new=int(change.new),
                caller=change.caller,
                block=change.block,
                op_type=change.op_type,
            )
        changes.append(change)
    return changes


def _json_value(value: str | int) -> str | int:
    return str(value) if isinstance(value, int) else value
