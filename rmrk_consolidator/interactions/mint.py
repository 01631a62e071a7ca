"""
MINT validation: collection creation.

A collection id embeds fragments of the issuer's public key, so only the
holder of that key can mint it. The fragments are compared as written and
the id must end with the upper-cased symbol.
"""

from rmrk_consolidator.crypto import AddressError, public_key_hex
from rmrk_consolidator.models.collection import Collection, CollectionConsolidated
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

# Hex characters of the public key checked at each end of the id
PUBKEY_FRAGMENT_LENGTH = 8


def validate_mint_ids(collection: Collection, remark: Remark) -> Rejection | None:
    """Check that the collection id was generated from the caller's public key."""
    try:
        pubkey = public_key_hex(remark.caller)
    except AddressError as e:
        return Rejection(f"[{OpType.MINT.value}] Cannot decode caller {remark.caller}: {e}")

    key_part, _, id_symbol = collection.id.partition("-")
    pubkey_start = pubkey[2 : 2 + PUBKEY_FRAGMENT_LENGTH]
    pubkey_end = pubkey[-PUBKEY_FRAGMENT_LENGTH:]

    if key_part[:PUBKEY_FRAGMENT_LENGTH] != pubkey_start or key_part[-PUBKEY_FRAGMENT_LENGTH:] != pubkey_end:
        expected = Collection.generate_id(pubkey, collection.symbol)
        return Rejection(
            f"[{OpType.MINT.value}] Caller's pubkey {pubkey} ({expected}) "
            f"does not match collection id {collection.id}"
        )
    if id_symbol != collection.symbol.upper():
        return Rejection(
            f"[{OpType.MINT.value}] Collection id {collection.id} "
            f"does not end with symbol {collection.symbol}"
        )
    return None


def validate_mint(
    remark: Remark,
    collection: Collection,
    existing: CollectionConsolidated | None,
) -> Rejection | None:
    if existing is not None:
        return Rejection(f"[{OpType.MINT.value}] Attempt to mint already existing collection")
    return validate_mint_ids(collection, remark)
