"""
Job to replay a remark dump into the configured database.

Reads a JSON array of remark records in block order, consolidates them
against the database adapter inside one session and commits the result.
Remarks are replayed exactly in file order.

Record format:
    {"block": 4892957, "caller": "HKK...", "remark": "RMRK::SEND::1.0.0::...",
     "interaction_type": "SEND",
     "extra_ex": [{"call": "balances.transfer", "value": "HKK...,10000", "caller": "..."}]}

`interaction_type` is optional and read from the remark header when absent.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from rmrk_consolidator.adapters.database import SqlAlchemyAdapter
from rmrk_consolidator.config import settings
from rmrk_consolidator.consolidator import Consolidator
from rmrk_consolidator.db.database import (
    async_session_factory,
    consolidation_session,
    init_db,
    reset_db,
)
from rmrk_consolidator.models.remark import BlockCall, Remark, interaction_type_of
from rmrk_consolidator.models.result import ConsolidationSnapshot

logger = logging.getLogger(__name__)


class RemarkLoadError(Exception):
    """Raised when a remark dump cannot be read."""

    pass


class BlockCallRecord(BaseModel):
    call: str
    value: str
    caller: str = ""


class RemarkRecord(BaseModel):
    """One entry of a remark dump."""

    block: int = Field(..., ge=0)
    caller: str
    remark: str
    interaction_type: str | None = None
    extra_ex: list[BlockCallRecord] = Field(default_factory=list)

    def to_remark(self) -> Remark:
        return Remark(
            block=self.block,
            caller=self.caller,
            interaction_type=self.interaction_type or interaction_type_of(self.remark),
            remark=self.remark,
            extra_ex=tuple(BlockCall(call=c.call, value=c.value, caller=c.caller) for c in self.extra_ex),
        )


def load_remarks(path: Path) -> list[Remark]:
    """
    Load remarks from a JSON dump.

    Raises:
        RemarkLoadError: If the file is unreadable or a record is malformed
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot read remark dump {path}: {e}"
        raise RemarkLoadError(msg) from e

    if not isinstance(data, list):
        msg = f"Remark dump {path} must contain a JSON array"
        raise RemarkLoadError(msg)

    remarks = []
    for index, entry in enumerate(data):
        try:
            remarks.append(RemarkRecord.model_validate(entry).to_remark())
        except ValidationError as e:
            msg = f"Invalid remark record #{index} in {path}: {e}"
            raise RemarkLoadError(msg) from e

    return remarks


async def replay_remarks(path: Path, reset: bool = False) -> ConsolidationSnapshot:
    """
    Consolidate a remark dump into the database.

    Args:
        path: JSON dump of remark records in block order
        reset: Drop existing state first, for a resync from the first remark

    Returns:
        Snapshot of the database state after the replay
    """
    remarks = load_remarks(path)
    logger.info("Loaded %d remarks from %s", len(remarks), path)

    if reset:
        logger.warning("Resetting consolidated state before replay")
        await reset_db()
    else:
        await init_db()

    async with consolidation_session(async_session_factory) as session:
        consolidator = Consolidator.from_settings(settings, adapter=SqlAlchemyAdapter(session))
        snapshot = await consolidator.consolidate(remarks)

    logger.info(
        "Replay complete up to block %s: %d NFTs, %d collections, %d invalid calls",
        snapshot.last_block,
        len(snapshot.nfts),
        len(snapshot.collections),
        len(snapshot.invalid),
    )
    return snapshot


def main() -> None:
    """CLI entry point for replaying a remark dump."""
    parser = argparse.ArgumentParser(description="Replay RMRK remarks into the database")
    parser.add_argument("dump", type=Path, help="JSON file of remark records in block order")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all consolidated state before replaying",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(replay_remarks(args.dump, reset=args.reset))


if __name__ == "__main__":
    main()
