import math
from dataclasses import dataclass

DEFAULT_AUCTION_EXPONENT = 1.25
DEFAULT_EFFICIENCY_FACTOR = 0.2


@dataclass(frozen=True)
class ValuationTuning:
    """Tunable constants for the valuation curve.

    ``auction_exponent`` above 1.0 rewards separation at the top of the pool and
    compresses the tail. ``efficiency_factor`` is the share of the K/9 z-score added to
    the strikeout category.
    """

    auction_exponent: float = DEFAULT_AUCTION_EXPONENT
    efficiency_factor: float = DEFAULT_EFFICIENCY_FACTOR
    min_bid: int = 1


@dataclass(frozen=True)
class EfficiencyBonus:
    target_category: str
    rate_key: str


@dataclass(frozen=True)
class VolumeConfig:
    rate_stats: frozenset[str]
    volume_key: str
    efficiency: EfficiencyBonus | None = None


HITTER_VOLUME = VolumeConfig(rate_stats=frozenset({"avg", "ops"}), volume_key="pa")
PITCHER_VOLUME = VolumeConfig(
    rate_stats=frozenset({"era", "whip"}),
    volume_key="ip",
    efficiency=EfficiencyBonus(target_category="k", rate_key="k9"),
)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
