import json
from urllib.parse import quote

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rmrk_consolidator.crypto import encode_address, public_key_hex
from rmrk_consolidator.models.collection import Collection
from rmrk_consolidator.models.db import Base
from rmrk_consolidator.models.remark import BlockCall, OpType, Remark

# Well-known development keys (//Alice, //Bob, //Charlie)
ALICE_KEY = bytes.fromhex("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")
BOB_KEY = bytes.fromhex("8eaf04151687736326c9fea17e25fc5287613693c912909cb226aa4794f26a48")
CHARLIE_KEY = bytes.fromhex("90b5ab205c6974c9ea841be688864633dc9ca8a357843eeacf2314649965fe22")

KUSAMA = 2


class RemarkFactory:
    """Builds RMRK 1.0.0 remarks for tests."""

    def collection_id(self, caller: str, symbol: str = "KANF") -> str:
        return Collection.generate_id(public_key_hex(caller), symbol)

    def nft_id(
        self, block: int, collection_id: str, instance: str = "ITEM", sn: int = 1
    ) -> str:
        return f"{block}-{collection_id}-{instance}-{sn:016d}"

    def raw(self, block: int, caller: str, op_type: OpType | str, remark: str, *extra: BlockCall) -> Remark:
        return Remark(block=block, caller=caller, interaction_type=op_type, remark=remark, extra_ex=extra)

    def mint(
        self,
        block: int,
        caller: str,
        symbol: str = "KANF",
        max: int = 0,
        collection_id: str | None = None,
    ) -> Remark:
        payload = {
            "name": f"{symbol} collection",
            "max": max,
            "issuer": caller,
            "symbol": symbol,
            "id": collection_id or self.collection_id(caller, symbol),
            "metadata": "ipfs://ipfs/QmCollection",
        }
        return self.raw(block, caller, OpType.MINT, f"RMRK::MINT::1.0.0::{quote(json.dumps(payload))}")

    def mint_nft(
        self,
        block: int,
        caller: str,
        collection_id: str,
        sn: int = 1,
        instance: str = "ITEM",
        transferable: int = 1,
    ) -> Remark:
        payload = {
            "collection": collection_id,
            "name": f"{instance} #{sn}",
            "instance": instance,
            "transferable": transferable,
            "sn": f"{sn:016d}",
            "metadata": "ipfs://ipfs/QmNFT",
        }
        return self.raw(block, caller, OpType.MINTNFT, f"RMRK::MINTNFT::1.0.0::{quote(json.dumps(payload))}")

    def send(self, block: int, caller: str, nft_id: str, recipient: str) -> Remark:
        return self.raw(block, caller, OpType.SEND, f"RMRK::SEND::1.0.0::{nft_id}::{recipient}")

    def list_for_sale(self, block: int, caller: str, nft_id: str, price: int) -> Remark:
        return self.raw(block, caller, OpType.LIST, f"RMRK::LIST::1.0.0::{nft_id}::{price}")

    def buy(self, block: int, caller: str, nft_id: str, pay_to: str | None = None, amount: int = 0) -> Remark:
        extra = ()
        if pay_to is not None:
            extra = (BlockCall(call="balances.transfer", value=f"{pay_to},{amount}", caller=caller),)
        return self.raw(block, caller, OpType.BUY, f"RMRK::BUY::1.0.0::{nft_id}", *extra)

    def consume(self, block: int, caller: str, nft_id: str, reason: str = "") -> Remark:
        suffix = f"::{reason}" if reason else ""
        return self.raw(block, caller, OpType.CONSUME, f"RMRK::CONSUME::1.0.0::{nft_id}{suffix}")

    def emote(self, block: int, caller: str, nft_id: str, unicode: str = "1F389") -> Remark:
        return self.raw(block, caller, OpType.EMOTE, f"RMRK::EMOTE::1.0.0::{nft_id}::{unicode}")

    def change_issuer(self, block: int, caller: str, collection_id: str, issuer: str) -> Remark:
        return self.raw(
            block, caller, OpType.CHANGEISSUER, f"RMRK::CHANGEISSUER::1.0.0::{collection_id}::{issuer}"
        )


@pytest.fixture
def remarks() -> RemarkFactory:
    return RemarkFactory()


@pytest.fixture
def alice() -> str:
    """Alice's Kusama address."""
    return encode_address(ALICE_KEY, KUSAMA)


@pytest.fixture
def bob() -> str:
    """Bob's Kusama address."""
    return encode_address(BOB_KEY, KUSAMA)


@pytest.fixture
def charlie() -> str:
    """Charlie's Kusama address."""
    return encode_address(CHARLIE_KEY, KUSAMA)


@pytest.fixture
def collection_id(remarks: RemarkFactory, alice: str) -> str:
    """Id of Alice's KANF collection."""
    return remarks.collection_id(alice)


@pytest.fixture
def minted(remarks: RemarkFactory, alice: str, collection_id: str) -> list[Remark]:
    """Alice mints a collection at block 1 and its first NFT at block 2."""
    return [
        remarks.mint(1, alice),
        remarks.mint_nft(2, alice, collection_id, sn=1),
    ]


@pytest.fixture
def nft_id(remarks: RemarkFactory, collection_id: str) -> str:
    """Id of the NFT minted by the `minted` fixture."""
    return remarks.nft_id(2, collection_id, sn=1)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
