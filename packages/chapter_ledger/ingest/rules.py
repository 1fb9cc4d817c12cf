"""Ordered keyword rules shared by the payment-source and category heuristics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

L = TypeVar("L")


@dataclass(frozen=True, slots=True)
class KeywordRule(Generic[L]):
    """Assign ``label`` when any keyword occurs in the text (case-insensitive)."""

    keywords: tuple[str, ...]
    label: L

    def matches(self, upper_text: str) -> bool:
        return any(k.upper() in upper_text for k in self.keywords)


def first_match(text: str | None, rules: Iterable[KeywordRule[L]], default: L) -> L:
    """Return the label of the first matching rule, else ``default``."""

    upper = (text or "").upper()
    for rule in rules:
        if rule.matches(upper):
            return rule.label
    return default


__all__ = ["KeywordRule", "first_match"]
