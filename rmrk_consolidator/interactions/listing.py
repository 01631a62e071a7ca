"""
LIST: offer an NFT for sale.

A listing can be replaced by listing again at another price and is
cancelled by listing at 0, by a BUY, by a SEND or by a CONSUME.
"""

from rmrk_consolidator.interactions.common import (
    check_live_nft,
    check_owner,
    check_transferable,
    record_change,
)
from rmrk_consolidator.models.interactions import Listing
from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.LIST


def validate_listing(remark: Remark, listing: Listing, nft: NFT | None) -> Rejection | None:
    rejection = check_live_nft(OP, "list", listing.id, nft)
    if rejection or nft is None:
        return rejection
    return check_owner(OP, "list", remark, nft) or check_transferable(OP, "list", nft)


def apply_listing(remark: Remark, listing: Listing, nft: NFT) -> None:
    """Set the price; relisting at the current price leaves no audit entry."""
    if listing.price != nft.forsale:
        record_change(nft, remark, OP, "forsale", nft.forsale, listing.price)
        nft.forsale = listing.price
