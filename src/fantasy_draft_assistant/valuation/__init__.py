from fantasy_draft_assistant.valuation.dollars import compute_dollar_values
from fantasy_draft_assistant.valuation.inflation import InflationStats, compute_inflation
from fantasy_draft_assistant.valuation.models import ValuationTuning
from fantasy_draft_assistant.valuation.pipeline import rank_players, value_league
from fantasy_draft_assistant.valuation.stat_accessor import StatAccessor, get_stat
from fantasy_draft_assistant.valuation.zscore import (
    category_breakdown,
    compute_z_scores,
    volume_factor,
    weighted_z_total,
)

__all__ = [
    "InflationStats",
    "StatAccessor",
    "ValuationTuning",
    "category_breakdown",
    "compute_dollar_values",
    "compute_inflation",
    "compute_z_scores",
    "get_stat",
    "rank_players",
    "value_league",
    "volume_factor",
    "weighted_z_total",
]
