"""
CHANGEISSUER: hand a collection over to another address.

The previous issuer immediately loses the right to mint into the
collection. Changing to a null address relinquishes control.
"""

from rmrk_consolidator.models.change import Change
from rmrk_consolidator.models.collection import Collection
from rmrk_consolidator.models.interactions import ChangeIssuer
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.CHANGEISSUER


def validate_change_issuer(
    remark: Remark,
    change_issuer: ChangeIssuer,
    collection: Collection | None,
) -> Rejection | None:
    if collection is None:
        return Rejection(
            f"[{OP.value}] This CHANGEISSUER remark is invalid - no such collection "
            f"with ID {change_issuer.id} found before block {remark.block}!"
        )
    if remark.caller != collection.issuer:
        return Rejection(
            f"[{OP.value}] Attempting to change issuer of collection {change_issuer.id} when not issuer!"
        )
    return None


def apply_change_issuer(remark: Remark, change_issuer: ChangeIssuer, collection: Collection) -> None:
    collection.add_change(
        Change(
            field="issuer",
            old=collection.issuer,
            new=change_issuer.issuer,
            caller=remark.caller,
            block=remark.block,
            op_type=OP.value,
        )
    )
    collection.issuer = change_issuer.issuer
