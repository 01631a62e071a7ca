"""
Parsers for the positional-argument interactions.

Formats:
    RMRK::SEND::1.0.0::<nft id>::<recipient>
    RMRK::LIST::1.0.0::<nft id>::<price>
    RMRK::BUY::1.0.0::<nft id>
    RMRK::CONSUME::1.0.0::<nft id>[::<reason>]
    RMRK::EMOTE::1.0.0::<nft id>::<unicode>
    RMRK::CHANGEISSUER::1.0.0::<collection id>::<new issuer>
"""

import re
from urllib.parse import unquote

from rmrk_consolidator.models.interactions import (
    Buy,
    ChangeIssuer,
    Consume,
    Emote,
    Listing,
    Send,
)
from rmrk_consolidator.models.remark import OpType
from rmrk_consolidator.models.result import Parsed, ParseFailure, ParseResult
from rmrk_consolidator.parsers.remark import RemarkFormatError, split_remark

# Price in planck: plain non-negative integer
PRICE_PATTERN = re.compile(r"^\d+$")

# Hex code point(s), optionally joined with "-" for ZWJ sequences: "1F389", "1F468-200D-1F4BB"
UNICODE_PATTERN = re.compile(r"^[0-9A-Fa-f]{1,6}(-[0-9A-Fa-f]{1,6})*$")


def parse_send(remark: str) -> ParseResult[Send]:
    try:
        nft_id, recipient = split_remark(remark, OpType.SEND, 2)
    except RemarkFormatError as e:
        return ParseFailure(str(e))

    if re.search(r"\s", recipient):
        return ParseFailure(f"Invalid recipient: {recipient}")

    return Parsed(Send(id=nft_id, recipient=recipient))


def parse_listing(remark: str) -> ParseResult[Listing]:
    try:
        nft_id, price = split_remark(remark, OpType.LIST, 2)
    except RemarkFormatError as e:
        return ParseFailure(str(e))

    if not PRICE_PATTERN.match(price):
        return ParseFailure(f"Invalid price: {price}")

    return Parsed(Listing(id=nft_id, price=int(price)))


def parse_buy(remark: str) -> ParseResult[Buy]:
    try:
        (nft_id,) = split_remark(remark, OpType.BUY, 1)
    except RemarkFormatError as e:
        return ParseFailure(str(e))

    return Parsed(Buy(id=nft_id))


def parse_consume(remark: str) -> ParseResult[Consume]:
    """Parse a CONSUME remark; the reason segment is optional and URI-decoded."""
    try:
        nft_id, *rest = split_remark(remark, OpType.CONSUME, 1, 2)
    except RemarkFormatError as e:
        return ParseFailure(str(e))

    reason = unquote(rest[0]) if rest else ""
    return Parsed(Consume(id=nft_id, reason=reason))


def parse_emote(remark: str) -> ParseResult[Emote]:
    try:
        nft_id, unicode = split_remark(remark, OpType.EMOTE, 2)
    except RemarkFormatError as e:
        return ParseFailure(str(e))

    if not UNICODE_PATTERN.match(unicode):
        return ParseFailure(f"Invalid emote unicode: {unicode}")

    return Parsed(Emote(id=nft_id, unicode=unicode.upper()))


def parse_change_issuer(remark: str) -> ParseResult[ChangeIssuer]:
    try:
        collection_id, issuer = split_remark(remark, OpType.CHANGEISSUER, 2)
    except RemarkFormatError as e:
        return ParseFailure(str(e))

    if re.search(r"\s", issuer):
        return ParseFailure(f"Invalid issuer: {issuer}")

    return Parsed(ChangeIssuer(id=collection_id, issuer=issuer))
