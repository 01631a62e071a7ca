from rmrk_consolidator.models.change import Change
from rmrk_consolidator.models.collection import (
    Collection,
    CollectionConsolidated,
    collection_to_instance,
    collection_to_record,
)
from rmrk_consolidator.models.interactions import (
    Buy,
    ChangeIssuer,
    Consume,
    Emote,
    Listing,
    Send,
)
from rmrk_consolidator.models.nft import (
    NFT,
    NFTConsolidated,
    Reactions,
    nft_to_instance,
    nft_to_record,
)
from rmrk_consolidator.models.remark import BlockCall, OpType, Remark, interaction_type_of
from rmrk_consolidator.models.result import (
    ConsolidationSnapshot,
    InvalidCall,
    Parsed,
    ParseFailure,
    ParseResult,
    Rejection,
)

__all__ = [
    "NFT",
    "BlockCall",
    "Buy",
    "Change",
    "ChangeIssuer",
    "Collection",
    "CollectionConsolidated",
    "ConsolidationSnapshot",
    "Consume",
    "Emote",
    "InvalidCall",
    "Listing",
    "NFTConsolidated",
    "OpType",
    "ParseFailure",
    "ParseResult",
    "Parsed",
    "Reactions",
    "Rejection",
    "Remark",
    "Send",
    "collection_to_instance",
    "collection_to_record",
    "interaction_type_of",
    "nft_to_instance",
    "nft_to_record",
]
