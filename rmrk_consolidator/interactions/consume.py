"""
CONSUME: burn an NFT.

Burning is terminal. The burn reason is taken from the remark's reason
segment, else from system.remark calls batched with it, else "true".
"""

from rmrk_consolidator.config import CONSUME_SEPARATOR, DEFAULT_BURN_REASON
from rmrk_consolidator.interactions.common import (
    check_live_nft,
    check_owner,
    clear_listing,
    record_change,
)
from rmrk_consolidator.models.interactions import Consume
from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.CONSUME

REMARK_CALL = "system.remark"


def burn_reason(remark: Remark, consume: Consume) -> str:
    if consume.reason:
        return consume.reason

    reasons = [call.value for call in remark.extra_ex if call.call == REMARK_CALL and call.value]
    if reasons:
        return CONSUME_SEPARATOR.join(reasons)
    return DEFAULT_BURN_REASON


def validate_consume(remark: Remark, consume: Consume, nft: NFT | None) -> Rejection | None:
    rejection = check_live_nft(OP, "burn", consume.id, nft)
    if rejection or nft is None:
        return rejection
    return check_owner(OP, "burn", remark, nft)


def apply_consume(remark: Remark, consume: Consume, nft: NFT) -> None:
    reason = burn_reason(remark, consume)
    record_change(nft, remark, OP, "burned", nft.burned, reason)
    nft.burned = reason
    clear_listing(nft, remark, OP)
