"""
BUY: purchase a listed NFT.

The BUY remark is batched with a balances.transfer paying the listed
price to the current owner. The transfer value is "<dest>,<amount>".
The destination is re-encoded with the configured SS58 format before
comparing against the owner, so owners stored in network format match
payments addressed as raw public keys or generic addresses.
"""

from rmrk_consolidator.crypto import AddressError, encode_address
from rmrk_consolidator.interactions.common import (
    check_live_nft,
    check_transferable,
    clear_listing,
    record_change,
)
from rmrk_consolidator.models.interactions import Buy
from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.BUY

TRANSFER_CALL = "balances.transfer"
TRANSFER_CALLS = frozenset({TRANSFER_CALL, "balances.transfer_keep_alive", "balances.transfer_allow_death"})


def find_payment(remark: Remark) -> tuple[str, str] | None:
    """Return (destination, amount) of the first transfer batched with the remark."""
    for call in remark.extra_ex:
        if call.call in TRANSFER_CALLS:
            destination, _, amount = call.value.partition(",")
            return destination.strip(), amount.strip()
    return None


def validate_payment(remark: Remark, nft: NFT, ss58_format: int | None) -> Rejection | None:
    payment = find_payment(remark)
    if payment is None:
        return Rejection(f"[{OP.value}] Missing transfer for NFT {nft.id}")

    destination, amount = payment
    if ss58_format is not None:
        try:
            destination = encode_address(destination, ss58_format)
        except AddressError as e:
            return Rejection(f"[{OP.value}] Invalid transfer destination {destination}: {e}")

    if destination != nft.owner:
        return Rejection(f"[{OP.value}] Transfer for the wrong owner of NFT {nft.id}: {destination}")

    if not amount.isdigit() or int(amount) != nft.forsale:
        return Rejection(
            f"[{OP.value}] Transfer for the wrong price of NFT {nft.id}: {amount}, listed at {nft.forsale}"
        )
    return None


def validate_buy(
    remark: Remark,
    buy: Buy,
    nft: NFT | None,
    ss58_format: int | None = None,
) -> Rejection | None:
    rejection = check_live_nft(OP, "buy", buy.id, nft)
    if rejection or nft is None:
        return rejection

    if nft.forsale <= 0:
        return Rejection(f"[{OP.value}] Attempting to buy not-for-sale NFT {buy.id}")

    if remark.caller == nft.owner:
        return Rejection(f"[{OP.value}] Owner cannot buy their own NFT {buy.id}")

    return check_transferable(OP, "buy", nft) or validate_payment(remark, nft, ss58_format)


def apply_buy(remark: Remark, buy: Buy, nft: NFT) -> None:
    record_change(nft, remark, OP, "owner", nft.owner, remark.caller)
    nft.owner = remark.caller
    clear_listing(nft, remark, OP)
