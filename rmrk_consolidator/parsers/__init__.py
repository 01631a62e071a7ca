from rmrk_consolidator.parsers.collection import CollectionPayload, parse_collection
from rmrk_consolidator.parsers.interactions import (
    parse_buy,
    parse_change_issuer,
    parse_consume,
    parse_emote,
    parse_listing,
    parse_send,
)
from rmrk_consolidator.parsers.nft import NFTPayload, parse_nft
from rmrk_consolidator.parsers.remark import (
    RemarkFormatError,
    decode_json_payload,
    split_remark,
)

__all__ = [
    "CollectionPayload",
    "NFTPayload",
    "RemarkFormatError",
    "decode_json_payload",
    "parse_buy",
    "parse_change_issuer",
    "parse_collection",
    "parse_consume",
    "parse_emote",
    "parse_listing",
    "parse_nft",
    "parse_send",
    "split_remark",
]
