"""
SS58 address codec.

Substrate addresses are base58 strings of:
    <network prefix (1 or 2 bytes)> <public key> <checksum (2 bytes)>

The checksum is the first two bytes of blake2b-512 over
b"SS58PRE" + prefix + public key.

Public keys may also be given directly as 0x-prefixed hex.
"""

import hashlib

import base58

SS58_CHECKSUM_PREFIX = b"SS58PRE"
CHECKSUM_LENGTH = 2

# Account ids this codec accepts (sr25519/ed25519 = 32, ecdsa = 33)
PUBLIC_KEY_LENGTHS = frozenset({32, 33})

# Prefixes 64..16383 use the two-byte form
MAX_SIMPLE_PREFIX = 63
MAX_PREFIX = 16383


class AddressError(ValueError):
    """Raised when an address cannot be decoded or encoded."""


def _checksum(payload: bytes) -> bytes:
    return hashlib.blake2b(SS58_CHECKSUM_PREFIX + payload, digest_size=64).digest()[
        :CHECKSUM_LENGTH
    ]


def _encode_prefix(ss58_format: int) -> bytes:
    if ss58_format < 0 or ss58_format > MAX_PREFIX:
        msg = f"Invalid SS58 format: {ss58_format}"
        raise AddressError(msg)

    if ss58_format <= MAX_SIMPLE_PREFIX:
        return bytes([ss58_format])

    first = ((ss58_format & 0b0000_0000_1111_1100) >> 2) | 0b0100_0000
    second = (ss58_format >> 8) | ((ss58_format & 0b0000_0000_0000_0011) << 6)
    return bytes([first, second])


def _decode_prefix(data: bytes) -> tuple[int, int]:
    """Return (ss58_format, prefix_length)."""
    if data[0] & 0b0100_0000:
        if len(data) < 2:
            msg = "Truncated SS58 prefix"
            raise AddressError(msg)
        ss58_format = ((data[0] & 0b0011_1111) << 2) | (data[1] >> 6) | ((data[1] & 0b0011_1111) << 8)
        return ss58_format, 2
    return data[0], 1


def _decode_hex(address: str) -> bytes:
    try:
        return bytes.fromhex(address[2:])
    except ValueError as e:
        msg = f"Invalid hex public key: {address}"
        raise AddressError(msg) from e


def decode_address_with_format(address: str) -> tuple[bytes, int | None]:
    """
    Decode an address into (public key, ss58 format).

    The format is None when the address was raw hex.

    Raises:
        AddressError: On bad encoding, length or checksum
    """
    if not address:
        msg = "Empty address"
        raise AddressError(msg)

    if address.startswith("0x"):
        public_key = _decode_hex(address)
        if len(public_key) not in PUBLIC_KEY_LENGTHS:
            msg = f"Invalid public key length {len(public_key)}: {address}"
            raise AddressError(msg)
        return public_key, None

    try:
        data = base58.b58decode(address)
    except ValueError as e:
        msg = f"Invalid base58 address: {address}"
        raise AddressError(msg) from e

    if len(data) < 1 + CHECKSUM_LENGTH:
        msg = f"Address too short: {address}"
        raise AddressError(msg)

    ss58_format, prefix_length = _decode_prefix(data)
    public_key = data[prefix_length:-CHECKSUM_LENGTH]
    if len(public_key) not in PUBLIC_KEY_LENGTHS:
        msg = f"Invalid public key length {len(public_key)}: {address}"
        raise AddressError(msg)

    if _checksum(data[:-CHECKSUM_LENGTH]) != data[-CHECKSUM_LENGTH:]:
        msg = f"Invalid address checksum: {address}"
        raise AddressError(msg)

    return public_key, ss58_format


def decode_address(address: str) -> bytes:
    """Decode an SS58 address or 0x hex public key into raw public key bytes."""
    public_key, _ = decode_address_with_format(address)
    return public_key


def encode_address(key: bytes | str, ss58_format: int = 42) -> str:
    """
    Encode a public key (bytes, hex, or any SS58 address) for a network.

    Args:
        key: Raw public key, 0x hex public key, or an address to re-encode
        ss58_format: Target network prefix (42 = generic Substrate)
    """
    public_key = decode_address(key) if isinstance(key, str) else key
    if len(public_key) not in PUBLIC_KEY_LENGTHS:
        msg = f"Invalid public key length {len(public_key)}"
        raise AddressError(msg)

    payload = _encode_prefix(ss58_format) + public_key
    return base58.b58encode(payload + _checksum(payload)).decode("ascii")


def public_key_hex(address: str) -> str:
    """Decode an address into a 0x-prefixed lowercase hex public key."""
    return "0x" + decode_address(address).hex()
