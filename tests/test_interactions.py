"""Tests for interaction validators and state transitions."""

import pytest

from rmrk_consolidator.interactions import (
    apply_buy,
    apply_change_issuer,
    apply_consume,
    apply_emote,
    apply_listing,
    apply_mint_nft,
    apply_send,
    burn_reason,
    find_payment,
    validate_buy,
    validate_change_issuer,
    validate_consume,
    validate_emote,
    validate_listing,
    validate_mint,
    validate_mint_ids,
    validate_mint_nft,
    validate_send,
)
from rmrk_consolidator.models import (
    NFT,
    BlockCall,
    Buy,
    ChangeIssuer,
    Collection,
    Consume,
    Emote,
    Listing,
    OpType,
    Remark,
    Send,
    collection_to_record,
)

OWNER = "owner-address"
STRANGER = "stranger-address"


def remark(op_type: OpType, caller: str = OWNER, block: int = 10, *extra: BlockCall) -> Remark:
    return Remark(block=block, caller=caller, interaction_type=op_type, remark="", extra_ex=extra)


def transfer(destination: str, amount: int | str) -> BlockCall:
    return BlockCall(call="balances.transfer", value=f"{destination},{amount}", caller=STRANGER)


@pytest.fixture
def collection() -> Collection:
    return Collection(
        block=1,
        name="Test",
        max=0,
        issuer=OWNER,
        symbol="TST",
        id="0aff6865bed3a66b-TST",
        metadata="",
    )


@pytest.fixture
def nft(collection: Collection) -> NFT:
    return NFT(
        block=2,
        collection=collection.id,
        name="Test #1",
        instance="TST",
        transferable=1,
        sn="0000000000000001",
        owner=OWNER,
    )


class TestMint:
    def test_ids_match_caller(self, remarks, alice) -> None:
        """An id built from the caller's key is accepted."""
        mint = remarks.mint(1, alice)
        collection = Collection(
            block=1,
            name="x",
            max=0,
            issuer=alice,
            symbol="KANF",
            id=remarks.collection_id(alice),
            metadata="",
        )

        assert validate_mint_ids(collection, mint) is None

    def test_ids_from_other_key(self, remarks, alice, bob) -> None:
        """An id built from another key is rejected."""
        mint = remarks.mint(1, bob)
        collection = Collection(
            block=1,
            name="x",
            max=0,
            issuer=bob,
            symbol="KANF",
            id=remarks.collection_id(alice),
            metadata="",
        )

        rejection = validate_mint_ids(collection, mint)
        assert rejection is not None
        assert "does not match" in rejection.message

    def test_lower_case_symbol_matches_id(self, remarks, alice) -> None:
        """Symbols are upper-cased in the id."""
        collection = Collection(
            block=1,
            name="x",
            max=0,
            issuer=alice,
            symbol="kanf",
            id=remarks.collection_id(alice),
            metadata="",
        )

        assert validate_mint_ids(collection, remarks.mint(1, alice)) is None

    def test_id_for_other_symbol(self, remarks, alice) -> None:
        """An id built for another symbol is rejected."""
        collection = Collection(
            block=1,
            name="x",
            max=0,
            issuer=alice,
            symbol="TST",
            id=remarks.collection_id(alice),
            metadata="",
        )

        rejection = validate_mint_ids(collection, remarks.mint(1, alice))
        assert rejection is not None
        assert "does not end with symbol TST" in rejection.message

    def test_undecodable_caller(self, collection: Collection) -> None:
        """Callers that are not addresses are rejected."""
        rejection = validate_mint_ids(collection, remark(OpType.MINT, caller="not an address"))

        assert rejection is not None
        assert "Cannot decode caller" in rejection.message

    def test_existing_collection(self, collection: Collection) -> None:
        """A collection id can only be minted once."""
        rejection = validate_mint(remark(OpType.MINT), collection, collection_to_record(collection))

        assert rejection is not None
        assert rejection.message == "[MINT] Attempt to mint already existing collection"


class TestMintNFT:
    def test_valid(self, nft: NFT, collection: Collection) -> None:
        """The issuer may mint the next serial."""
        assert validate_mint_nft(remark(OpType.MINTNFT), nft, collection, None, 0) is None

    def test_full_collection(self, nft: NFT, collection: Collection) -> None:
        """Full collections reject new items."""
        collection.max = 1
        rejection = validate_mint_nft(remark(OpType.MINTNFT), nft, collection, None, 1)

        assert rejection is not None
        assert "is full" in rejection.message

    def test_unbounded_collection(self, nft: NFT, collection: Collection) -> None:
        """max=0 places no cap on the collection."""
        nft.sn = "0000000000001000"
        assert validate_mint_nft(remark(OpType.MINTNFT), nft, collection, None, 999) is None

    def test_serial_out_of_order(self, nft: NFT, collection: Collection) -> None:
        """Serials must follow the current item count."""
        rejection = validate_mint_nft(remark(OpType.MINTNFT), nft, collection, None, 1)

        assert rejection is not None
        assert "out of order" in rejection.message

    def test_apply_sets_owner_to_issuer(self, nft: NFT, collection: Collection) -> None:
        """New NFTs belong to the issuer."""
        nft.owner = ""
        apply_mint_nft(nft, collection)

        assert nft.owner == OWNER


class TestSend:
    def test_valid(self, nft: NFT) -> None:
        """The owner may send."""
        assert validate_send(remark(OpType.SEND), Send(id=nft.id, recipient=STRANGER), nft) is None

    def test_missing(self) -> None:
        """Unknown NFTs cannot be sent."""
        rejection = validate_send(remark(OpType.SEND), Send(id="missing", recipient=STRANGER), None)

        assert rejection is not None
        assert rejection.message == "[SEND] Attempting to send non-existant NFT missing"

    def test_non_owner(self, nft: NFT) -> None:
        """Only the owner may send."""
        send = Send(id=nft.id, recipient=STRANGER)
        rejection = validate_send(remark(OpType.SEND, caller=STRANGER), send, nft)

        assert rejection is not None
        assert f"real owner: {OWNER}" in rejection.message

    def test_apply_clears_listing(self, nft: NFT) -> None:
        """Sending records the owner change and clears the listing."""
        nft.forsale = 500
        apply_send(remark(OpType.SEND), Send(id=nft.id, recipient=STRANGER), nft)

        assert nft.owner == STRANGER
        assert nft.forsale == 0
        assert [(c.field, c.old, c.new) for c in nft.changes] == [
            ("owner", OWNER, STRANGER),
            ("forsale", 500, 0),
        ]


class TestListing:
    def test_non_transferable(self, nft: NFT) -> None:
        """Non-transferable NFTs cannot be listed."""
        nft.transferable = 0
        rejection = validate_listing(remark(OpType.LIST), Listing(id=nft.id, price=5), nft)

        assert rejection is not None
        assert "non-transferable" in rejection.message

    def test_relist_same_price_not_audited(self, nft: NFT) -> None:
        """Relisting at the current price adds no change."""
        nft.forsale = 5
        apply_listing(remark(OpType.LIST), Listing(id=nft.id, price=5), nft)

        assert nft.changes == []

    def test_apply_sets_price(self, nft: NFT) -> None:
        """Listing sets the price and records the change."""
        apply_listing(remark(OpType.LIST), Listing(id=nft.id, price=5), nft)

        assert nft.forsale == 5
        assert nft.changes[0].op_type == "LIST"


class TestBuy:
    def test_find_payment(self) -> None:
        """The first transfer in the batch is the payment."""
        note = BlockCall(call="system.remark", value="x")
        buy_remark = remark(OpType.BUY, STRANGER, 10, note, transfer(OWNER, 5))

        assert find_payment(buy_remark) == (OWNER, "5")

    def test_transfer_keep_alive_accepted(self, nft: NFT) -> None:
        """transfer_keep_alive counts as payment."""
        nft.forsale = 5
        payment = BlockCall(call="balances.transfer_keep_alive", value=f"{OWNER},5")

        assert validate_buy(remark(OpType.BUY, STRANGER, 10, payment), Buy(id=nft.id), nft) is None

    def test_not_for_sale(self, nft: NFT) -> None:
        """Unlisted NFTs cannot be bought."""
        rejection = validate_buy(remark(OpType.BUY, STRANGER, 10, transfer(OWNER, 0)), Buy(id=nft.id), nft)

        assert rejection is not None
        assert "not-for-sale" in rejection.message

    def test_wrong_owner(self, nft: NFT) -> None:
        """Payment must go to the current owner."""
        nft.forsale = 5
        rejection = validate_buy(remark(OpType.BUY, STRANGER, 10, transfer(STRANGER, 5)), Buy(id=nft.id), nft)

        assert rejection is not None
        assert "wrong owner" in rejection.message

    def test_owner_cannot_buy_own_nft(self, nft: NFT) -> None:
        """The current owner paying themselves is rejected."""
        nft.forsale = 5
        rejection = validate_buy(remark(OpType.BUY, OWNER, 10, transfer(OWNER, 5)), Buy(id=nft.id), nft)

        assert rejection is not None
        assert "own NFT" in rejection.message

    def test_non_numeric_amount(self, nft: NFT) -> None:
        """Amounts must be whole numbers."""
        nft.forsale = 5
        buy_remark = remark(OpType.BUY, STRANGER, 10, transfer(OWNER, "5.0"))
        rejection = validate_buy(buy_remark, Buy(id=nft.id), nft)

        assert rejection is not None
        assert "wrong price" in rejection.message

    def test_undecodable_destination_with_format(self, nft: NFT) -> None:
        """Destinations must decode under the configured format."""
        nft.forsale = 5
        rejection = validate_buy(
            remark(OpType.BUY, STRANGER, 10, transfer("garbage", 5)), Buy(id=nft.id), nft, ss58_format=2
        )

        assert rejection is not None
        assert "Invalid transfer destination" in rejection.message

    def test_apply(self, nft: NFT) -> None:
        """Buying transfers ownership and clears the listing."""
        nft.forsale = 5
        apply_buy(remark(OpType.BUY, STRANGER), Buy(id=nft.id), nft)

        assert nft.owner == STRANGER
        assert nft.forsale == 0


class TestConsume:
    def test_reason_from_remark(self) -> None:
        """The CONSUME remark's own reason wins."""
        assert burn_reason(remark(OpType.CONSUME), Consume(id="x", reason="crafted")) == "crafted"

    def test_reason_from_batched_remarks(self) -> None:
        """Batched remarks are joined into the reason."""
        consume_remark = remark(
            OpType.CONSUME,
            OWNER,
            10,
            BlockCall(call="system.remark", value="first"),
            BlockCall(call="system.remark", value="second"),
        )

        assert burn_reason(consume_remark, Consume(id="x")) == "first<consume_sep>second"

    def test_default_reason(self) -> None:
        """Without any reason the NFT is burned as "true"."""
        assert burn_reason(remark(OpType.CONSUME), Consume(id="x")) == "true"

    def test_burned_rejected(self, nft: NFT) -> None:
        """Burned NFTs cannot be consumed again."""
        nft.burned = "true"
        rejection = validate_consume(remark(OpType.CONSUME), Consume(id=nft.id), nft)

        assert rejection is not None
        assert rejection.message == f"[CONSUME] Attempting to burn burned NFT {nft.id}"

    def test_apply_burns_and_delists(self, nft: NFT) -> None:
        """Consuming burns the NFT and clears its listing."""
        nft.forsale = 7
        apply_consume(remark(OpType.CONSUME), Consume(id=nft.id), nft)

        assert nft.burned == "true"
        assert nft.forsale == 0
        assert [c.field for c in nft.changes] == ["burned", "forsale"]


class TestEmote:
    def test_anyone_may_emote(self, nft: NFT) -> None:
        """Non-owners may react."""
        assert validate_emote(remark(OpType.EMOTE, STRANGER), Emote(id=nft.id, unicode="1F600"), nft) is None

    def test_toggle(self, nft: NFT) -> None:
        """Emoting twice removes the reaction."""
        emote = Emote(id=nft.id, unicode="1F600")
        apply_emote(remark(OpType.EMOTE, STRANGER), emote, nft)
        apply_emote(remark(OpType.EMOTE, OWNER), emote, nft)
        apply_emote(remark(OpType.EMOTE, STRANGER), emote, nft)

        assert nft.reactions == {"1F600": [OWNER]}
        assert nft.changes == []

    def test_emit_changes(self, nft: NFT) -> None:
        """Reactions are audited when enabled."""
        apply_emote(remark(OpType.EMOTE, STRANGER), Emote(id=nft.id, unicode="1F600"), nft, True)

        assert nft.changes[0].field == "reactions"
        assert nft.changes[0].new == "1F600"


class TestChangeIssuer:
    def test_valid(self, collection: Collection) -> None:
        """The issuer may hand over the collection."""
        change = ChangeIssuer(id=collection.id, issuer=STRANGER)

        assert validate_change_issuer(remark(OpType.CHANGEISSUER), change, collection) is None

    def test_not_issuer(self, collection: Collection) -> None:
        """Only the issuer may change the issuer."""
        change = ChangeIssuer(id=collection.id, issuer=STRANGER)
        rejection = validate_change_issuer(remark(OpType.CHANGEISSUER, STRANGER), change, collection)

        assert rejection is not None
        assert rejection.message.endswith("when not issuer!")

    def test_apply(self, collection: Collection) -> None:
        """The new issuer is set and audited."""
        change = ChangeIssuer(id=collection.id, issuer=STRANGER)
        apply_change_issuer(remark(OpType.CHANGEISSUER), change, collection)

        assert collection.issuer == STRANGER
        assert collection.changes[0].old == OWNER
        assert collection.changes[0].op_type == "CHANGEISSUER"
