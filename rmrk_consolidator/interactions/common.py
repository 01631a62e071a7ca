"""Checks shared by the NFT mutating interactions."""

from rmrk_consolidator.models.change import Change
from rmrk_consolidator.models.nft import NFT
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection


def check_live_nft(op_type: OpType, verb: str, nft_id: str, nft: NFT | None) -> Rejection | None:
    """Reject missing and burned NFTs."""
    if nft is None:
        return Rejection(f"[{op_type.value}] Attempting to {verb} non-existant NFT {nft_id}")
    if nft.burned:
        return Rejection(f"[{op_type.value}] Attempting to {verb} burned NFT {nft_id}")
    return None


def check_owner(op_type: OpType, verb: str, remark: Remark, nft: NFT) -> Rejection | None:
    if remark.caller != nft.owner:
        return Rejection(
            f"[{op_type.value}] Attempting to {verb} non-owned NFT {nft.id}, real owner: {nft.owner}"
        )
    return None


def check_transferable(op_type: OpType, verb: str, nft: NFT) -> Rejection | None:
    if nft.transferable == 0:
        return Rejection(f"[{op_type.value}] Attempting to {verb} non-transferable NFT {nft.id}")
    return None


def record_change(
    nft: NFT,
    remark: Remark,
    op_type: OpType,
    field: str,
    old: str | int,
    new: str | int,
) -> None:
    nft.add_change(
        Change(
            field=field,
            old=old,
            new=new,
            caller=remark.caller,
            block=remark.block,
            op_type=op_type.value,
        )
    )


def clear_listing(nft: NFT, remark: Remark, op_type: OpType) -> None:
    """Cancel an active listing; ownership changes and burns imply this."""
    if nft.forsale > 0:
        record_change(nft, remark, op_type, "forsale", nft.forsale, 0)
        nft.forsale = 0
