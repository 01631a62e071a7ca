"""
EMOTE: react to an NFT.

Reactions toggle: emoting the same unicode twice removes the caller's
reaction. Reactions are non-destructive, but burned NFTs still reject
them like every other interaction.
"""

from rmrk_consolidator.interactions.common import check_live_nft, record_change
from rmrk_consolidator.models.interactions import Emote
from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.EMOTE


def validate_emote(remark: Remark, emote: Emote, nft: NFT | None) -> Rejection | None:
    return check_live_nft(OP, "emote on", emote.id, nft)


def apply_emote(remark: Remark, emote: Emote, nft: NFT, emit_emote_changes: bool = False) -> None:
    """
    Toggle the caller's reaction.

    Args:
        emit_emote_changes: Also log the reaction in the NFT audit trail
    """
    addresses = nft.reactions.setdefault(emote.unicode, [])
    if remark.caller in addresses:
        addresses.remove(remark.caller)
    else:
        addresses.append(remark.caller)

    if emit_emote_changes:
        record_change(nft, remark, OP, "reactions", "", emote.unicode)
