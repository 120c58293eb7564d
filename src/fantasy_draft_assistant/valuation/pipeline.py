from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fantasy_draft_assistant.domain.player import PlayerKind
from fantasy_draft_assistant.valuation.dollars import compute_dollar_values
from fantasy_draft_assistant.valuation.models import ValuationTuning, round_half_up
from fantasy_draft_assistant.valuation.zscore import compute_z_scores

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_assistant.domain.league_settings import LeagueConfig
    from fantasy_draft_assistant.domain.player import PlayerProjection
    from fantasy_draft_assistant.domain.valuation import ValuedPlayer

logger = logging.getLogger(__name__)

# Baseline pools cover this many rosters' worth of players per team.
_BASELINE_DEPTH = 2


@dataclass(frozen=True)
class PoolSizes:
    baseline_hitters: int
    baseline_pitchers: int
    drafted_hitters: int
    drafted_pitchers: int


def pool_sizes(league: LeagueConfig, hitter_count: int, pitcher_count: int) -> PoolSizes:
    """Baseline calibration sizes and per-team drafted slots for each player kind.

    Bench slots are split between hitters and pitchers in proportion to active roster
    spots.
    """
    active_h = league.roster_hitters
    active_p = league.roster_pitchers
    active_total = active_h + active_p
    bench = league.bench_slots
    bench_h = round_half_up(bench * active_h / active_total) if active_total > 0 else 0
    bench_p = bench - bench_h
    return PoolSizes(
        baseline_hitters=min(hitter_count, league.teams * (active_h + bench_h) * _BASELINE_DEPTH),
        baseline_pitchers=min(pitcher_count, league.teams * (active_p + bench_p) * _BASELINE_DEPTH),
        drafted_hitters=active_h + bench_h,
        drafted_pitchers=active_p + bench_p,
    )


def budget_pools(league: LeagueConfig) -> tuple[float, float]:
    """League-wide auction money for hitters and pitchers."""
    total = league.teams * league.budget
    hitter_pct, pitcher_pct = league.hitter_pitcher_split
    return total * hitter_pct / 100, total * pitcher_pct / 100


def rank_players(players: Sequence[ValuedPlayer]) -> list[ValuedPlayer]:
    """Assign ``value_rank`` within each kind and ``overall_rank`` across the pool.

    Overall order uses dollar value, falling back to ``z_total`` for players without one.
    """
    hitters = sorted((p for p in players if p.kind is not PlayerKind.PITCHER), key=lambda p: p.z_total, reverse=True)
    pitchers = sorted((p for p in players if p.kind is PlayerKind.PITCHER), key=lambda p: p.z_total, reverse=True)
    by_kind = [dataclasses.replace(p, value_rank=i) for i, p in enumerate(hitters, start=1)]
    by_kind += [dataclasses.replace(p, value_rank=i) for i, p in enumerate(pitchers, start=1)]

    overall = sorted(by_kind, key=lambda p: p.dollar_value or p.z_total, reverse=True)
    return [dataclasses.replace(p, overall_rank=i) for i, p in enumerate(overall, start=1)]


def value_league(
    hitters: Sequence[PlayerProjection],
    pitchers: Sequence[PlayerProjection],
    league: LeagueConfig,
    tuning: ValuationTuning | None = None,
) -> list[ValuedPlayer]:
    """Z-score, price (auction only) and rank a full player pool for ``league``."""
    tuning = tuning or ValuationTuning()
    sizes = pool_sizes(league, len(hitters), len(pitchers))
    logger.debug("Pool sizes for %s: %s", league.name, sizes)

    valued_hitters = compute_z_scores(
        hitters, league, PlayerKind.HITTER, draftable_count=sizes.baseline_hitters, tuning=tuning
    )
    valued_pitchers = compute_z_scores(
        pitchers, league, PlayerKind.PITCHER, draftable_count=sizes.baseline_pitchers, tuning=tuning
    )

    if league.is_auction:
        hitter_budget, pitcher_budget = budget_pools(league)
        valued_hitters = compute_dollar_values(
            valued_hitters,
            hitter_budget,
            league.teams,
            sizes.drafted_hitters,
            exponent=tuning.auction_exponent,
            min_bid=tuning.min_bid,
        )
        valued_pitchers = compute_dollar_values(
            valued_pitchers,
            pitcher_budget,
            league.teams,
            sizes.drafted_pitchers,
            exponent=tuning.auction_exponent,
            min_bid=tuning.min_bid,
        )
    else:
        valued_hitters = [dataclasses.replace(p, dollar_value=0) for p in valued_hitters]
        valued_pitchers = [dataclasses.replace(p, dollar_value=0) for p in valued_pitchers]

    ranked = rank_players([*valued_hitters, *valued_pitchers])
    logger.info("Valued %d hitters and %d pitchers for %s", len(hitters), len(pitchers), league.name)
    return ranked
