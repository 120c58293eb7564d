from __future__ import annotations

import logging
import math
import statistics
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fantasy_draft_assistant.domain.player import PlayerKind
from fantasy_draft_assistant.domain.valuation import CategoryBreakdown, ValuedPlayer
from fantasy_draft_assistant.valuation.models import (
    HITTER_VOLUME,
    PITCHER_VOLUME,
    ValuationTuning,
    VolumeConfig,
)
from fantasy_draft_assistant.valuation.stat_accessor import DEFAULT_ACCESSOR, StatAccessor

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fantasy_draft_assistant.domain.league_settings import LeagueConfig
    from fantasy_draft_assistant.domain.player import PlayerProjection

logger = logging.getLogger(__name__)

_STRENGTH_THRESHOLD = 0.5


@dataclass(frozen=True)
class CategoryStats:
    mean: float
    std_dev: float
    inverted: bool = False

    def zscore(self, value: float) -> float:
        if self.std_dev <= 0.0:
            return 0.0
        z = (value - self.mean) / self.std_dev
        return -z if self.inverted else z


@dataclass(frozen=True)
class RateStats:
    mean: float
    std_dev: float


def volume_config_for(kind: PlayerKind) -> VolumeConfig:
    return PITCHER_VOLUME if kind is PlayerKind.PITCHER else HITTER_VOLUME


def _pstdev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    return statistics.pstdev(values)


def _stat(stats: Mapping[str, float], key: str) -> float | None:
    raw = stats.get(key)
    if raw is None:
        return None
    value = float(raw)
    return None if math.isnan(value) else value


def compute_category_stats(
    pool: Sequence[PlayerProjection],
    categories: Sequence[str],
    inverted: frozenset[str],
    accessor: StatAccessor = DEFAULT_ACCESSOR,
) -> dict[str, CategoryStats]:
    """Mean and population standard deviation per category across ``pool``.

    Categories with no usable value in the pool are omitted.
    """
    result: dict[str, CategoryStats] = {}
    for cat in categories:
        values = [v for v in (accessor.value(p.stats, cat) for p in pool) if v is not None]
        if not values:
            continue
        result[cat] = CategoryStats(
            mean=statistics.mean(values),
            std_dev=_pstdev(values),
            inverted=cat in inverted,
        )
    return result


def volume_factor(player_volume: float, mean_volume: float) -> float:
    """Dampening multiplier for rate-stat z-scores of low-volume players.

    Square-root curve capped at 1.0; neutral when either volume is missing.
    """
    if mean_volume <= 0.0 or player_volume <= 0.0:
        return 1.0
    return min(1.0, math.sqrt(player_volume / mean_volume))


def _preliminary_totals(
    players: Sequence[PlayerProjection],
    categories: Sequence[str],
    stats: dict[str, CategoryStats],
    weights: Mapping[str, float],
    accessor: StatAccessor,
) -> list[float]:
    totals: list[float] = []
    for player in players:
        total = 0.0
        for cat in categories:
            value = accessor.value(player.stats, cat)
            cat_stats = stats.get(cat)
            if value is None or cat_stats is None:
                continue
            total += cat_stats.zscore(value) * weights.get(cat, 1.0)
        totals.append(total)
    return totals


def _baseline_pool(
    players: Sequence[PlayerProjection],
    prelim_totals: list[float],
    draftable_count: int,
) -> list[PlayerProjection]:
    if draftable_count <= 0 or draftable_count >= len(players):
        return list(players)
    order = sorted(range(len(players)), key=lambda i: prelim_totals[i], reverse=True)
    return [players[i] for i in order[:draftable_count]]


def _volume_baselines(
    baseline: Sequence[PlayerProjection],
    config: VolumeConfig,
) -> tuple[float, RateStats | None]:
    volumes = [v for v in (_stat(p.stats, config.volume_key) for p in baseline) if v is not None and v > 0.0]
    mean_volume = statistics.mean(volumes) if volumes else 0.0

    efficiency: RateStats | None = None
    if config.efficiency is not None:
        rates = [v for v in (_stat(p.stats, config.efficiency.rate_key) for p in baseline) if v is not None]
        if len(rates) > 1:
            efficiency = RateStats(mean=statistics.mean(rates), std_dev=statistics.pstdev(rates))
    return mean_volume, efficiency


def compute_z_scores(
    players: Sequence[PlayerProjection],
    league: LeagueConfig,
    kind: PlayerKind,
    weights: Mapping[str, float] | None = None,
    draftable_count: int = 0,
    tuning: ValuationTuning | None = None,
    accessor: StatAccessor = DEFAULT_ACCESSOR,
) -> list[ValuedPlayer]:
    """Three-pass z-score valuation for a pool of one player kind.

    1. Preliminary mean/stddev over the whole pool ranks players.
    2. When ``draftable_count`` is smaller than the pool, mean/stddev are recomputed
       over the top ``draftable_count`` players only.
    3. Final z-scores against that baseline, with volume dampening on rate stats and
       the K/9 efficiency bonus on strikeouts for pitchers.

    Returns one ``ValuedPlayer`` per input player, in input order.
    """
    if not players:
        return []

    tuning = tuning or ValuationTuning()
    weights = league.category_weights if weights is None else weights
    categories = league.categories_for(kind)
    volume = volume_config_for(kind)

    baseline_stats = compute_category_stats(players, categories, league.inverted_categories, accessor)
    prelim = _preliminary_totals(players, categories, baseline_stats, weights, accessor)

    baseline = _baseline_pool(players, prelim, draftable_count)
    if len(baseline) < len(players):
        baseline_stats = compute_category_stats(baseline, categories, league.inverted_categories, accessor)
        logger.debug("Recalibrated %s baseline on top %d of %d players", kind, len(baseline), len(players))

    mean_volume, efficiency = _volume_baselines(baseline, volume)
    logger.debug("%s mean %s=%.1f efficiency=%s", kind, volume.volume_key, mean_volume, efficiency)

    result: list[ValuedPlayer] = []
    for player in players:
        player_volume = _stat(player.stats, volume.volume_key) or 0.0
        factor = volume_factor(player_volume, mean_volume)

        category_z: dict[str, float] = {}
        z_total = 0.0
        valid = 0
        for cat in categories:
            value = accessor.value(player.stats, cat)
            cat_stats = baseline_stats.get(cat)
            if value is None or cat_stats is None or cat_stats.std_dev <= 0.0:
                category_z[cat] = 0.0
                continue

            z = cat_stats.zscore(value)
            if cat in volume.rate_stats:
                z *= factor
            bonus = volume.efficiency
            if bonus is not None and cat == bonus.target_category and efficiency is not None:
                rate = _stat(player.stats, bonus.rate_key)
                if rate is not None and efficiency.std_dev > 0.0:
                    z += (rate - efficiency.mean) / efficiency.std_dev * tuning.efficiency_factor

            category_z[cat] = round(z, 2)
            z_total += z * weights.get(cat, 1.0)
            valid += 1

        result.append(
            ValuedPlayer(
                player=player,
                category_z=category_z,
                z_total=round(z_total, 2),
                z_avg=round(z_total / valid, 2) if valid else 0.0,
            )
        )
    return result


def weighted_z_total(player: ValuedPlayer, league: LeagueConfig) -> float:
    """Sum of the player's category z-scores under the league's current weights."""
    return sum(player.z(cat) * league.weight(cat) for cat in league.categories_for(player.kind))


def category_breakdown(
    player: ValuedPlayer,
    league: LeagueConfig,
    accessor: StatAccessor = DEFAULT_ACCESSOR,
) -> list[CategoryBreakdown]:
    breakdown: list[CategoryBreakdown] = []
    for cat in league.categories_for(player.kind):
        z = player.z(cat)
        breakdown.append(
            CategoryBreakdown(
                category=cat.upper(),
                value=accessor.value(player.player.stats, cat),
                z_score=z,
                is_strength=z > _STRENGTH_THRESHOLD,
                is_weakness=z < -_STRENGTH_THRESHOLD,
            )
        )
    return breakdown
