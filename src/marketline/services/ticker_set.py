"""Ordered set of user-tracked ticker symbols."""

import logging
import threading
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


def normalize_symbol(symbol: str) -> str:
    """Strip surrounding whitespace and uppercase."""
    return symbol.strip().upper()


class TickerSet:
    """
    Ordered, duplicate-free list of ticker symbols.

    Insertion order is the on-screen row order. Mutated only through add()
    and remove(); readers on other threads get tuple copies.
    """

    def __init__(self, symbols: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._symbols: list[str] = []
        self.add(symbols)

    def add(self, symbols: Iterable[str]) -> int:
        """
        Append symbols not already present, in input order.

        Returns:
            Number of symbols actually added (0 for duplicates or empty input)
        """
        added = 0
        with self._lock:
            for symbol in symbols:
                normalized = normalize_symbol(symbol)
                if normalized and normalized not in self._symbols:
                    self._symbols.append(normalized)
                    added += 1
        if added:
            logger.info("Added %d ticker(s)", added)
        return added

    def remove(self, symbols: Iterable[str]) -> int:
        """
        Remove matching symbols, keeping the relative order of the rest.

        Returns:
            Number of symbols actually removed
        """
        targets = {normalize_symbol(s) for s in symbols} - {""}
        with self._lock:
            before = len(self._symbols)
            self._symbols = [s for s in self._symbols if s not in targets]
            removed = before - len(self._symbols)
        if removed:
            logger.info("Removed %d ticker(s)", removed)
        return removed

    def symbols(self) -> tuple[str, ...]:
        """Snapshot of the current symbols in order."""
        with self._lock:
            return tuple(self._symbols)

    def __len__(self) -> int:
        with self._lock:
            return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols())

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        with self._lock:
            return normalize_symbol(symbol) in self._symbols
