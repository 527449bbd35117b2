"""Ledger snapshot sources.

The live card/transaction store is external; everything downstream of it
consumes a plain snapshot. A JSON export is the built-in source.
"""

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from cardwise.api.schemas import LedgerSnapshot

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """A ledger snapshot could not be read or did not validate."""


@runtime_checkable
class LedgerSource(Protocol):
    def load(self) -> LedgerSnapshot:
        """Return the current cards and transactions."""
        ...


def parse_snapshot(raw: str | bytes, source: str = "<memory>") -> LedgerSnapshot:
    try:
        return LedgerSnapshot.model_validate_json(raw)
    except ValidationError as e:
        raise SnapshotError(f"Invalid ledger snapshot in {source}: {e}") from e


class JsonLedgerFile:
    """Snapshot stored as {"cards": [...], "transactions": [...]}."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> LedgerSnapshot:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise SnapshotError(f"Cannot read ledger snapshot {self.path}: {e}") from e

        snapshot = parse_snapshot(raw, str(self.path))
        logger.info(
            "Loaded snapshot %s: %d cards, %d transactions",
            self.path, len(snapshot.cards), len(snapshot.transactions),
        )
        return snapshot

    def save(self, snapshot: LedgerSnapshot) -> None:
        self.path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
