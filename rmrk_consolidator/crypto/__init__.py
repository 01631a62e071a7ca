from rmrk_consolidator.crypto.address import (
    AddressError,
    decode_address,
    decode_address_with_format,
    encode_address,
    public_key_hex,
)

__all__ = [
    "AddressError",
    "decode_address",
    "decode_address_with_format",
    "encode_address",
    "public_key_hex",
]
