"""
Remark consolidator.

Replays an ordered sequence of RMRK 1.0.0 remarks into collection and
NFT state. Each remark is parsed, validated against the state produced
by every remark before it, and committed through the storage adapter
before the next remark is considered.

INVARIANT: Same remark sequence against a fresh adapter = same snapshot.

Rejected remarks never stop the run. They are recorded as invalid calls:
- Parse failures are keyed on the raw remark text
- Validation failures are keyed on the target entity id

Remarks of unknown interaction type are logged and skipped without an
invalid call. Adapter errors propagate and end the run.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from rmrk_consolidator.adapters.base import ConsolidatorAdapter, SnapshotReader
from rmrk_consolidator.adapters.in_memory import InMemoryAdapter
from rmrk_consolidator.config import Settings, settings
from rmrk_consolidator.interactions import (
    apply_buy,
    apply_change_issuer,
    apply_consume,
    apply_emote,
    apply_listing,
    apply_mint_nft,
    apply_send,
    validate_buy,
    validate_change_issuer,
    validate_consume,
    validate_emote,
    validate_listing,
    validate_mint,
    validate_mint_nft,
    validate_send,
)
from rmrk_consolidator.models.collection import Collection, collection_to_instance
from rmrk_consolidator.models.nft import NFT, NFTConsolidated, nft_to_instance
from rmrk_consolidator.models.remark import OpType, Remark
from rmrk_consolidator.models.result import (
    ConsolidationSnapshot,
    InvalidCall,
    ParseFailure,
    ParseResult,
    Rejection,
)
from rmrk_consolidator.parsers import (
    parse_buy,
    parse_change_issuer,
    parse_collection,
    parse_consume,
    parse_emote,
    parse_listing,
    parse_nft,
    parse_send,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Handler = Callable[[Remark], Awaitable[bool]]


class Consolidator:
    """
    Event-sourcing state machine over RMRK remarks.

    Attributes:
        adapter: Authoritative store of consolidated state
        invalid_calls: Rejected remarks, append-only
        collections: Working copies of collections touched in this run
        nfts: Working copies of NFTs touched in this run
    """

    def __init__(
        self,
        address_format: int | None = None,
        adapter: ConsolidatorAdapter | None = None,
        emit_emote_changes: bool = False,
        emit_interaction_changes: bool = False,
    ):
        """
        Args:
            address_format: SS58 prefix used to re-encode BUY payment destinations
            adapter: Storage backend, defaults to a fresh InMemoryAdapter
            emit_emote_changes: Log EMOTE events in the NFT 'changes' audit list
            emit_interaction_changes: Return applied interactions as {op_type: id}
        """
        self.address_format = address_format
        self.adapter: ConsolidatorAdapter = adapter if adapter is not None else InMemoryAdapter()
        self.emit_emote_changes = emit_emote_changes
        self.emit_interaction_changes = emit_interaction_changes

        self.invalid_calls: list[InvalidCall] = []
        self.collections: dict[str, Collection] = {}
        self.nfts: dict[str, NFT] = {}
        self.interaction_changes: list[dict[str, str]] = []

        self._handlers: dict[OpType, Handler] = {
            OpType.MINT: self.mint,
            OpType.MINTNFT: self.mint_nft,
            OpType.SEND: self.send,
            OpType.LIST: self.list_for_sale,
            OpType.BUY: self.buy,
            OpType.CONSUME: self.consume,
            OpType.EMOTE: self.emote,
            OpType.CHANGEISSUER: self.change_issuer,
        }

    @classmethod
    def from_settings(
        cls,
        config: Settings = settings,
        adapter: ConsolidatorAdapter | None = None,
    ) -> "Consolidator":
        """Build a consolidator configured from environment settings."""
        return cls(
            address_format=config.address_format,
            adapter=adapter,
            emit_emote_changes=config.emit_emote_changes,
            emit_interaction_changes=config.emit_interaction_changes,
        )

    # --- Ledger plumbing ---

    def _invalidate(self, op_type: OpType, remark: Remark, object_id: str, message: str) -> None:
        self.invalid_calls.append(
            InvalidCall(
                op_type=op_type.value,
                block=remark.block,
                caller=remark.caller,
                object_id=object_id,
                message=message,
            )
        )
        logger.debug("Invalid %s at block %d: %s", op_type.value, remark.block, message)

    def _parsed(self, op_type: OpType, remark: Remark, result: ParseResult[T]) -> T | None:
        """Unwrap a parse result, recording the remark as dead on failure."""
        if isinstance(result, ParseFailure):
            self._invalidate(
                op_type,
                remark,
                remark.remark,
                f"[{op_type.value}] Dead before instantiation: {result.message}",
            )
            return None
        return result.value

    def _rejected(
        self, op_type: OpType, remark: Remark, object_id: str, rejection: Rejection | None
    ) -> bool:
        if rejection is None:
            return False
        self._invalidate(op_type, remark, object_id, rejection.message)
        return True

    def _record_interaction(self, op_type: OpType, entity_id: str) -> None:
        if self.emit_interaction_changes:
            self.interaction_changes.append({op_type.value: entity_id})

    async def _load_nft(self, nft_id: str, unique: bool = True) -> tuple[NFTConsolidated | None, NFT | None]:
        if unique:
            consolidated = await self.adapter.get_nft_by_id_unique(nft_id)
        else:
            consolidated = await self.adapter.get_nft_by_id(nft_id)
        return consolidated, nft_to_instance(consolidated)

    # --- Interaction handlers ---
    # Each returns True when the remark was accepted, False when it was
    # recorded as invalid. The run continues either way.

    async def mint(self, remark: Remark) -> bool:
        """MINT: create a collection."""
        collection = self._parsed(OpType.MINT, remark, parse_collection(remark.remark, remark.block))
        if collection is None:
            return False

        existing = await self.adapter.get_collection_by_id(collection.id)
        if self._rejected(OpType.MINT, remark, collection.id, validate_mint(remark, collection, existing)):
            return False

        await self.adapter.update_collection_mint(collection)
        self.collections[collection.id] = collection
        self._record_interaction(OpType.MINT, collection.id)
        return True

    async def mint_nft(self, remark: Remark) -> bool:
        """MINTNFT: create an NFT inside a collection, owned by its issuer."""
        nft = self._parsed(OpType.MINTNFT, remark, parse_nft(remark.remark, remark.block))
        if nft is None:
            return False

        existing = await self.adapter.get_nft_by_id_unique(nft.id)
        collection = collection_to_instance(await self.adapter.get_collection_by_id(nft.collection))
        count = await self.adapter.get_collection_nft_count(nft.collection) if collection else 0

        rejection = validate_mint_nft(remark, nft, collection, existing, count)
        if self._rejected(OpType.MINTNFT, remark, nft.id, rejection) or collection is None:
            return False

        apply_mint_nft(nft, collection)
        await self.adapter.update_nft_mint(nft, remark.block)
        self.nfts[nft.id] = nft
        self._record_interaction(OpType.MINTNFT, nft.id)
        return True

    async def send(self, remark: Remark) -> bool:
        """SEND: transfer an NFT to a recipient."""
        send = self._parsed(OpType.SEND, remark, parse_send(remark.remark))
        if send is None:
            return False

        consolidated, nft = await self._load_nft(send.id)
        rejection = validate_send(remark, send, nft)
        if self._rejected(OpType.SEND, remark, send.id, rejection) or nft is None or consolidated is None:
            return False

        apply_send(remark, send, nft)
        await self.adapter.update_nft_send(nft, consolidated, remark.block)
        self.nfts[nft.id] = nft
        self._record_interaction(OpType.SEND, nft.id)
        return True

    async def list_for_sale(self, remark: Remark) -> bool:
        """LIST: list an NFT for sale, or cancel with price 0."""
        listing = self._parsed(OpType.LIST, remark, parse_listing(remark.remark))
        if listing is None:
            return False

        consolidated, nft = await self._load_nft(listing.id)
        rejection = validate_listing(remark, listing, nft)
        if self._rejected(OpType.LIST, remark, listing.id, rejection) or nft is None or consolidated is None:
            return False

        apply_listing(remark, listing, nft)
        await self.adapter.update_nft_list(nft, consolidated, remark.block)
        self.nfts[nft.id] = nft
        self._record_interaction(OpType.LIST, nft.id)
        return True

    async def buy(self, remark: Remark) -> bool:
        """BUY: purchase a listed NFT with a batched payment."""
        buy = self._parsed(OpType.BUY, remark, parse_buy(remark.remark))
        if buy is None:
            return False

        consolidated, nft = await self._load_nft(buy.id)
        rejection = validate_buy(remark, buy, nft, self.address_format)
        if self._rejected(OpType.BUY, remark, buy.id, rejection) or nft is None or consolidated is None:
            return False

        apply_buy(remark, buy, nft)
        await self.adapter.update_nft_buy(nft, consolidated, remark.block)
        self.nfts[nft.id] = nft
        self._record_interaction(OpType.BUY, nft.id)
        return True

    async def consume(self, remark: Remark) -> bool:
        """CONSUME: burn an NFT."""
        consume = self._parsed(OpType.CONSUME, remark, parse_consume(remark.remark))
        if consume is None:
            return False

        consolidated, nft = await self._load_nft(consume.id)
        rejection = validate_consume(remark, consume, nft)
        rejected = self._rejected(OpType.CONSUME, remark, consume.id, rejection)
        if rejected or nft is None or consolidated is None:
            return False

        apply_consume(remark, consume, nft)
        await self.adapter.update_nft_consume(nft, consolidated, remark.block)
        self.nfts[nft.id] = nft
        self._record_interaction(OpType.CONSUME, nft.id)
        return True

    async def emote(self, remark: Remark) -> bool:
        """
        EMOTE: toggle a reaction.

        Uses the lenient NFT lookup. An NFT already updated in this same
        block is not written again, so the reaction is dropped without
        being recorded as invalid.
        """
        emote = self._parsed(OpType.EMOTE, remark, parse_emote(remark.remark))
        if emote is None:
            return False

        consolidated, nft = await self._load_nft(emote.id, unique=False)
        rejection = validate_emote(remark, emote, nft)
        if self._rejected(OpType.EMOTE, remark, emote.id, rejection) or nft is None or consolidated is None:
            return False

        apply_emote(remark, emote, nft, self.emit_emote_changes)
        if remark.block == consolidated.updated_at_block:
            logger.debug("Skipping EMOTE on %s, already updated in block %d", nft.id, remark.block)
            return True

        await self.adapter.update_nft_emote(nft, consolidated, remark.block)
        self.nfts[nft.id] = nft
        self._record_interaction(OpType.EMOTE, nft.id)
        return True

    async def change_issuer(self, remark: Remark) -> bool:
        """CHANGEISSUER: hand a collection to a new issuer."""
        change = self._parsed(OpType.CHANGEISSUER, remark, parse_change_issuer(remark.remark))
        if change is None:
            return False

        consolidated = await self.adapter.get_collection_by_id(change.id)
        collection = collection_to_instance(consolidated)
        rejection = validate_change_issuer(remark, change, collection)
        if (
            self._rejected(OpType.CHANGEISSUER, remark, change.id, rejection)
            or collection is None
            or consolidated is None
        ):
            return False

        apply_change_issuer(remark, change, collection)
        await self.adapter.update_collection_issuer(collection, consolidated, remark.block)
        self.collections[collection.id] = collection
        self._record_interaction(OpType.CHANGEISSUER, collection.id)
        return True

    # --- Run ---

    async def consolidate(self, remarks: Iterable[Remark] | None = None) -> ConsolidationSnapshot:
        """
        Replay remarks in the given order and return the resulting state.

        Remarks are not re-sorted; callers supply them in block order.
        Never raises for bad remarks; adapter errors propagate.
        """
        last_block: int | None = None
        accepted = 0

        for remark in remarks or ():
            last_block = remark.block
            op_type = OpType.from_value(remark.interaction_type)
            if op_type is None:
                logger.warning(
                    "Unable to process remark - wrong type: %s (block %d)",
                    remark.interaction_type,
                    remark.block,
                )
                continue

            if await self._handlers[op_type](remark):
                accepted += 1

        if isinstance(self.adapter, SnapshotReader):
            nfts = await self.adapter.get_all_nfts()
            collections = await self.adapter.get_all_collections()
        else:
            nfts, collections = [], []

        logger.info(
            "Consolidated %d NFTs across %d collections: %d remarks accepted, %d invalid calls",
            len(nfts),
            len(collections),
            accepted,
            len(self.invalid_calls),
        )

        return ConsolidationSnapshot(
            nfts=nfts,
            collections=collections,
            invalid=list(self.invalid_calls),
            changes=list(self.interaction_changes) if self.emit_interaction_changes else None,
            last_block=last_block,
        )
