"""
Parsed interaction requests.

These are the typed payloads of the non-minting remarks. They carry
only what the remark says; whether the request is allowed is decided
against consolidated state by the interaction validators.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Send:
    """SEND: transfer NFT `id` to `recipient`."""

    id: str
    recipient: str


@dataclass(frozen=True, slots=True)
class Listing:
    """LIST: offer NFT `id` for `price` planck (0 cancels the listing)."""

    id: str
    price: int


@dataclass(frozen=True, slots=True)
class Buy:
    """BUY: purchase listed NFT `id`; payment travels in the same batch."""

    id: str


@dataclass(frozen=True, slots=True)
class Consume:
    """CONSUME: burn NFT `id`, optionally stating why."""

    id: str
    reason: str = ""


@dataclass(frozen=True, slots=True)
class Emote:
    """EMOTE: toggle the caller's `unicode` reaction on NFT `id`."""

    id: str
    unicode: str


@dataclass(frozen=True, slots=True)
class ChangeIssuer:
    """CHANGEISSUER: hand collection `id` over to `issuer`."""

    id: str
    issuer: str
