from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    SOLID = "solid"
    LIQUID = "liquid"


@dataclass(frozen=True)
class BaseQuantity:
    """A unit string converted to grams (solids) or milliliters (liquids)."""

    amount: float
    phase: Phase


# token -> (factor to base unit, phase)
_TOKENS: dict[str, tuple[float, Phase]] = {
    "kg": (1000.0, Phase.SOLID),
    "kgs": (1000.0, Phase.SOLID),
    "g": (1.0, Phase.SOLID),
    "gm": (1.0, Phase.SOLID),
    "gms": (1.0, Phase.SOLID),
    "gram": (1.0, Phase.SOLID),
    "grams": (1.0, Phase.SOLID),
    "l": (1000.0, Phase.LIQUID),
    "ltr": (1000.0, Phase.LIQUID),
    "litre": (1000.0, Phase.LIQUID),
    "litres": (1000.0, Phase.LIQUID),
    "liter": (1000.0, Phase.LIQUID),
    "liters": (1000.0, Phase.LIQUID),
    "ml": (1.0, Phase.LIQUID),
}

PIECE_TOKENS = frozenset({"pc", "pcs", "piece", "pieces"})

# "5", "1.5", ".5" and "5." are all numbers
_NUMBER = r"\d+\.?\d*|\.\d+"
_MULT_RE = re.compile(rf"^({_NUMBER})\s*[x×*]\s*({_NUMBER})\s*([a-z]*)")
_DIRECT_RE = re.compile(rf"({_NUMBER})\s*([a-z]*)")


def _to_base(value: float, token: str) -> BaseQuantity | None:
    token = token or "g"
    if token in PIECE_TOKENS:
        return None
    # Bare numbers and unknown words are read as grams.
    factor, phase = _TOKENS.get(token, (1.0, Phase.SOLID))
    amount = value * factor
    if amount <= 0:
        return None
    return BaseQuantity(amount=amount, phase=phase)


def parse_unit(unit_str: str | None) -> BaseQuantity | None:
    """Parse strings like "5 kg", "400g", "1 L" or "2 x 400 g".

    Piece counts ("3 pcs") cannot be put on a weight/volume basis and give None.
    """
    if not unit_str:
        return None
    text = str(unit_str).lower().replace(",", "").strip()
    if not text:
        return None

    mult = _MULT_RE.match(text)
    if mult:
        qty = float(mult.group(1))
        size = float(mult.group(2))
        return _to_base(qty * size, mult.group(3))

    direct = _DIRECT_RE.search(text)
    if direct:
        return _to_base(float(direct.group(1)), direct.group(2))

    return None
