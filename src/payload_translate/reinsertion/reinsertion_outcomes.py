"""Reinsertion domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ReinsertionResult:
    """Translated document copy plus positional bookkeeping."""

    document: dict[str, Any]
    applied: int
    skipped: int
    expected: int
    received: int

    @property
    def count_mismatch(self) -> bool:
        """Return True when the provider returned a different number of translations."""
        return self.expected != self.received
