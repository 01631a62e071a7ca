"""
MINTNFT validation: issuing an NFT inside a collection.

Rules, checked in order:
1. The NFT id must not exist yet
2. The parent collection must exist
3. Only the collection's current issuer may mint into it
4. A non-zero collection `max` caps the number of NFTs
5. Serial numbers are issued in order: sn == existing count + 1
"""

from rmrk_consolidator.models.collection import Collection
from rmrk_consolidator.models.nft import NFT, NFTConsolidated
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import Rejection

OP = OpType.MINTNFT.value


def validate_mint_nft(
    remark: Remark,
    nft: NFT,
    collection: Collection | None,
    existing: NFTConsolidated | None,
    collection_nft_count: int,
) -> Rejection | None:
    """
    Validate a MINTNFT against current state.

    Args:
        remark: The MINTNFT remark
        nft: Parsed NFT candidate
        collection: Current parent collection, None if it does not exist
        existing: Stored NFT with the same id, if any
        collection_nft_count: NFTs already minted into the collection

    Returns:
        Rejection describing the first violated rule, or None.
    """
    if existing is not None:
        return Rejection(f"[{OP}] Attempt to mint already existing NFT")

    if collection is None:
        return Rejection(f"[{OP}] NFT referencing non-existant parent collection {nft.collection}")

    if remark.caller != collection.issuer:
        return Rejection(
            f"[{OP}] Attempted issue of NFT in non-owned collection. "
            f"Issuer: {collection.issuer}, caller: {remark.caller}"
        )

    if collection.max > 0 and collection_nft_count >= collection.max:
        return Rejection(
            f"[{OP}] Collection {collection.id} is full: max {collection.max} NFTs already minted"
        )

    expected_sn = collection_nft_count + 1
    if int(nft.sn) != expected_sn:
        return Rejection(
            f"[{OP}] Serial number {nft.sn} out of order in collection {collection.id}, "
            f"expected {expected_sn}"
        )

    return None


def apply_mint_nft(nft: NFT, collection: Collection) -> None:
    """New NFTs belong to the collection issuer."""
    nft.owner = collection.issuer
