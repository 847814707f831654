from __future__ import annotations

from typing import Protocol

SIM_THRESHOLD = 0.65


class Similarity(Protocol):
    def __call__(self, a: str, b: str) -> float: ...


def tokens_of(value: str) -> set[str]:
    return set((value or "").split())


def token_jaccard(a: str, b: str) -> float:
    """Intersection over union of the whitespace tokens of two strings.

    Two empty strings are vacuously similar (1.0); one empty string against a
    non-empty one scores 0.0.
    """
    ta = tokens_of(a)
    tb = tokens_of(b)
    if not ta and not tb:
        return 1.0
    if not ta or not tb:
        return 0.0
    return len(ta & tb) / len(ta | tb)
