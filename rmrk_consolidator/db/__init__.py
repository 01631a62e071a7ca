from rmrk_consolidator.db.database import consolidation_session, init_db, reset_db
from rmrk_consolidator.db.operations import (
    collection_to_model,
    count_collection_nfts,
    create_collection,
    create_nft,
    find_nft,
    get_collection,
    get_nft,
    list_collections,
    list_nfts,
    nft_to_model,
    update_collection,
    update_nft,
)

__all__ = [
    "collection_to_model",
    "consolidation_session",
    "count_collection_nfts",
    "create_collection",
    "create_nft",
    "find_nft",
    "get_collection",
    "get_nft",
    "init_db",
    "list_collections",
    "list_nfts",
    "nft_to_model",
    "reset_db",
    "update_collection",
    "update_nft",
]
