"""
Warmup set calculator.

Derives a ramp of warmup sets from the working weight of an exercise:
each step is a percentage of the working weight, rounded to the nearest
2.5 kg plate increment, with a lower bound of 5 kg.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


PLATE_INCREMENT_KG = 2.5
MIN_WARMUP_WEIGHT_KG = 5.0

_STANDARD = (0.40, 0.60, 0.80)
_CONSERVATIVE = (0.30, 0.50, 0.70, 0.85)
_MINIMAL = (0.50, 0.75)

_PRESETS = {
    "standard": _STANDARD,
    "conservative": _CONSERVATIVE,
    "minimal": _MINIMAL,
    "none": (),
}


@dataclass(frozen=True)
class WarmupStrategy:
    """
    A named ramp of warmup percentages.

    Presets are available as class methods; `custom` accepts any list of
    fractions of the working weight.

    Examples:
        >>> WarmupStrategy.standard().percentages
        (0.4, 0.6, 0.8)
        >>> WarmupStrategy.from_raw("custom:0.5,0.7").raw_value
        'custom:0.5,0.7'
    """

    name: str
    percentages: Tuple[float, ...] = field(default=())

    @classmethod
    def standard(cls) -> "WarmupStrategy":
        return cls("standard", _STANDARD)

    @classmethod
    def conservative(cls) -> "WarmupStrategy":
        return cls("conservative", _CONSERVATIVE)

    @classmethod
    def minimal(cls) -> "WarmupStrategy":
        return cls("minimal", _MINIMAL)

    @classmethod
    def none(cls) -> "WarmupStrategy":
        return cls("none", ())

    @classmethod
    def custom(cls, percentages: List[float]) -> "WarmupStrategy":
        if any(p <= 0 or p > 1 for p in percentages):
            raise ValueError("Warmup percentages must be in (0, 1]")
        return cls("custom", tuple(percentages))

    @property
    def raw_value(self) -> str:
        """Serialized form, e.g. 'standard' or 'custom:0.4,0.6'."""
        if self.name == "custom":
            return "custom:" + ",".join(str(p) for p in self.percentages)
        return self.name

    @classmethod
    def from_raw(cls, raw: str) -> Optional["WarmupStrategy"]:
        """Parse a serialized strategy; returns None if unrecognized."""
        if raw in _PRESETS:
            return cls(raw, _PRESETS[raw])
        if raw.startswith("custom:"):
            percentages = []
            for part in raw[len("custom:"):].split(","):
                try:
                    percentages.append(float(part))
                except ValueError:
                    continue
            if percentages:
                return cls("custom", tuple(percentages))
        return None


@dataclass(frozen=True)
class WarmupSet:
    """A computed warmup step."""

    weight: float
    reps: int
    percentage_of_max: float


def _round_to_plates(weight: float) -> float:
    return round(weight / PLATE_INCREMENT_KG) * PLATE_INCREMENT_KG


def warmup_reps(percentage: float) -> int:
    """Reps for a warmup step: lighter steps get more reps."""
    if percentage < 0.7:
        return 5
    if percentage < 0.85:
        return 3
    return 1


def calculate_warmup_sets(
    working_weight: float,
    working_reps: int,
    strategy: Optional[WarmupStrategy] = None,
) -> List[WarmupSet]:
    """
    Calculate warmup sets leading up to a working weight.

    Args:
        working_weight: Weight of the first working set in kg
        working_reps: Reps of the working set (not used by the current rep scheme)
        strategy: Percentage ramp to use; defaults to the standard ramp

    Returns:
        Warmup sets in ascending weight order
    """
    strategy = strategy or WarmupStrategy.standard()
    return [
        WarmupSet(
            weight=max(_round_to_plates(working_weight * percentage), MIN_WARMUP_WEIGHT_KG),
            reps=warmup_reps(percentage),
            percentage_of_max=percentage,
        )
        for percentage in strategy.percentages
    ]


def recommended_warmup_set_count(working_weight: float) -> int:
    if working_weight < 40:
        return 1
    if working_weight < 80:
        return 2
    if working_weight < 120:
        return 3
    return 4


def recommended_strategy(working_weight: float) -> WarmupStrategy:
    """Pick a ramp based on how heavy the working weight is."""
    if working_weight < 40:
        return WarmupStrategy.minimal()
    if working_weight < 120:
        return WarmupStrategy.standard()
    return WarmupStrategy.conservative()
