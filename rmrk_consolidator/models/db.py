"""
SQLAlchemy ORM models for persistent storage.

Models mirror the consolidated dataclasses but add database persistence.
Audit trails and reactions are stored as JSON; listing prices are stored
as text because balances are u128 and overflow BIGINT.
"""

from typing import Any

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CollectionDB(Base):
    """A consolidated collection."""

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    block: Mapped[int] = mapped_column(Integer, index=True)
    name: Mapped[str] = mapped_column(Text)
    max: Mapped[int] = mapped_column(Integer, default=0)
    issuer: Mapped[str] = mapped_column(String(64), index=True)
    symbol: Mapped[str] = mapped_column(String(255))
    metadata_uri: Mapped[str] = mapped_column("metadata", Text, default="")
    changes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    updated_at_block: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<CollectionDB(id={self.id}, issuer={self.issuer})>"


class NFTDB(Base):
    """
    A consolidated NFT.

    `collection` is deliberately not a foreign key: a consolidated NFT
    may be read back independently of its collection row.
    """

    __tablename__ = "nfts"

    id: Mapped[str] = mapped_column(String(512), primary_key=True)
    block: Mapped[int] = mapped_column(Integer, index=True)
    collection: Mapped[str] = mapped_column(String(255), index=True)
    name: Mapped[str] = mapped_column(Text)
    instance: Mapped[str] = mapped_column(String(255))
    transferable: Mapped[int] = mapped_column(Integer, default=1)
    sn: Mapped[str] = mapped_column(String(32))
    metadata_uri: Mapped[str | None] = mapped_column("metadata", Text, nullable=True)
    data: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner: Mapped[str] = mapped_column(String(64), index=True)
    forsale: Mapped[str] = mapped_column(String(40), default="0")
    reactions: Mapped[dict[str, list[str]]] = mapped_column(JSON, default=dict)
    burned: Mapped[str] = mapped_column(Text, default="")
    changes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    updated_at_block: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<NFTDB(id={self.id}, owner={self.owner})>"
