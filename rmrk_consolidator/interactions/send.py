"""
SEND: transfer an NFT to an arbitrary recipient.

Only the owner may send, only live transferable NFTs can be sent,
and a send cancels any active listing.
"""

from rmrk_consolidator.interactions.common import (
    check_live_nft,
    check_owner,
    check_transferable,
    clear_listing,
    record_change,
)
from rmrk_consolidator.models.interactions import Send
from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.SEND


def validate_send(remark: Remark, send: Send, nft: NFT | None) -> Rejection | None:
    rejection = check_live_nft(OP, "send", send.id, nft)
    if rejection or nft is None:
        return rejection
    return check_owner(OP, "send", remark, nft) or check_transferable(OP, "send", nft)


def apply_send(remark: Remark, send: Send, nft: NFT) -> None:
    record_change(nft, remark, OP, "owner", nft.owner, send.recipient)
    nft.owner = send.recipient
    clear_listing(nft, remark, OP)
