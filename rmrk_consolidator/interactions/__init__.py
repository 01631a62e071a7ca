from rmrk_consolidator.interactions.buy import apply_buy, find_payment, validate_buy, validate_payment
from rmrk_consolidator.interactions.change_issuer import apply_change_issuer, validate_change_issuer
from rmrk_consolidator.interactions.consume import apply_consume, burn_reason, validate_consume
from rmrk_consolidator.interactions.emote import apply_emote, validate_emote
from rmrk_consolidator.interactions.listing import apply_listing, validate_listing
from rmrk_consolidator.interactions.mint import validate_mint, validate_mint_ids
from rmrk_consolidator.interactions.mint_nft import apply_mint_nft, validate_mint_nft
from rmrk_consolidator.interactions.send import apply_send, validate_send

__all__ = [
    "apply_buy",
    "apply_change_issuer",
    "apply_consume",
    "apply_emote",
    "apply_listing",
    "apply_mint_nft",
    "apply_send",
    "burn_reason",
    "find_payment",
    "validate_buy",
    "validate_change_issuer",
    "validate_consume",
    "validate_emote",
    "validate_listing",
    "validate_mint",
    "validate_mint_ids",
    "validate_mint_nft",
    "validate_payment",
    "validate_send",
]
