"""
Normalizer

Converts raw metrics into dimensionless sub-scores in [0, 100].

Three strategy families are kept separate on purpose; they react differently
to batch composition and merging them would change observable rankings:

- TierBucketNormalizer: fixed thresholds, independent of the batch
- MaxRelativeNormalizer: value / batch maximum (floor 1) * 100
- InverseRecencyNormalizer / RecentActivityNormalizer: newer is better

All normalizers are pure and deterministic.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .constants import MAX_SCORE, MIN_SCORE

# A band score is either a fixed value or a function of the raw value
BandScore = Union[float, Callable[[float], float]]


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def batch_max(values: Iterable[float], floor: float = 1.0) -> float:
    """Maximum of the batch, never below `floor` (guards divide-by-zero)."""
    return max([floor, *values])


class Normalizer:
    """Maps one raw metric value to a sub-score."""

    def normalize(self, value: float) -> float:
        raise NotImplementedError

    def __call__(self, value: float) -> float:
        return clamp_score(self.normalize(value))


class TierBucketNormalizer(Normalizer):
    """
    Monotonic step function.

    Bands are (floor, score) pairs checked from the highest floor down; the
    first floor the value reaches wins. A band score may be a callable to
    interpolate linearly inside the band.
    """

    def __init__(self, bands: Sequence[Tuple[float, BandScore]], below_floor: BandScore = MIN_SCORE):
        self.bands: List[Tuple[float, BandScore]] = sorted(bands, key=lambda band: band[0], reverse=True)
        self.below_floor = below_floor

    @staticmethod
    def _resolve(score: BandScore, value: float) -> float:
        return score(value) if callable(score) else float(score)

    def normalize(self, value: float) -> float:
        for floor, score in self.bands:
            if value >= floor:
                return self._resolve(score, value)
        return self._resolve(self.below_floor, value)


class MaxRelativeNormalizer(Normalizer):
    """Scales by the largest value seen in the current batch."""

    def __init__(self, maximum: float):
        self.maximum = max(maximum, 1.0)

    @classmethod
    def fit(cls, values: Iterable[float]) -> "MaxRelativeNormalizer":
        return cls(batch_max(values))

    def normalize(self, value: float) -> float:
        return (value / self.maximum) * 100


class InverseRecencyNormalizer(Normalizer):
    """Days since an event, inverted against the batch maximum."""

    def __init__(self, max_days: float):
        self.max_days = max(max_days, 1.0)

    @classmethod
    def fit(cls, days: Iterable[float]) -> "InverseRecencyNormalizer":
        return cls(batch_max(days))

    def normalize(self, value: float) -> float:
        return 100 - (value / self.max_days) * 100


class RecentActivityNormalizer(Normalizer):
    """
    Days since the last activity, inverted against a fixed window.
    Anything at or beyond the window scores 0; no activity at all scores 0.
    """

    def __init__(self, window_days: int):
        self.window_days = max(window_days, 1)

    def normalize(self, value: Optional[float]) -> float:
        if value is None:
            return MIN_SCORE
        return 100 - min((value / self.window_days) * 100, 100)
