"""Rank available players for the user's next pick.

``best_available`` orders by the league-weighted z total alone. ``smart_recommendations``
scales that score by how well the player fits the roster being built:

    score = weighted_z_total * positional_multiplier * category_need_multiplier
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fantasy_draft_assistant.domain.player import PlayerKind
from fantasy_draft_assistant.draft.scarcity import default_tiers, scarcity_positions_for, scarcity_table
from fantasy_draft_assistant.draft.team import category_balance, team_stats
from fantasy_draft_assistant.valuation.models import round_half_up
from fantasy_draft_assistant.valuation.zscore import weighted_z_total

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from fantasy_draft_assistant.domain.draft import DraftState, RosterEntry
    from fantasy_draft_assistant.domain.league_settings import LeagueConfig
    from fantasy_draft_assistant.domain.valuation import ValuedPlayer
    from fantasy_draft_assistant.draft.scarcity import ScarcityTable

logger = logging.getLogger(__name__)

HITTER_CAP_POSITIONS: tuple[str, ...] = ("C", "1B", "2B", "3B", "SS", "OF")
PITCHER_CAP_POSITIONS: tuple[str, ...] = ("SP", "RP")

_POSITION_NORMALIZATIONS: dict[str, str] = {"LF": "OF", "CF": "OF", "RF": "OF"}

_BENCH_HITTER_SHARE = 0.6
_BENCH_SP_SHARE = 0.6

EMPTY_SCARCE_MULTIPLIER = 1.6
EMPTY_SLOT_MULTIPLIER = 1.4
UNDER_CAP_MULTIPLIER = 1.2
SATURATED_MULTIPLIER = 0.8
INNINGS_CAPPED_MULTIPLIER = 0.5
SECONDARY_SCARCITY_FLOOR = 1.15

SCARCE_TOP_TIER = 5
VERY_SCARCE_TOP_TIER = 3
INNINGS_LIMIT_SHARE = 0.95

BALANCED_SPREAD = 0.5
NEED_SPREAD_WEIGHT = 0.5
NEUTRAL_Z_SUM = 0.1
NEED_MULTIPLIER_MIN = 0.8
NEED_MULTIPLIER_MAX = 1.5
NEED_FIT_THRESHOLD = 1.2

DEFAULT_LIMIT = 5


def normalize_position(pos: str) -> str:
    return _POSITION_NORMALIZATIONS.get(pos.strip(), pos.strip())


def position_caps(composition: Iterable[str]) -> dict[str, int]:
    """Roster slots available to each position.

    Flex slots count toward every position they accept (CI: 1B/3B, MI: 2B/SS, Util: all
    hitters, P: SP/RP). Bench slots split 60/40 between hitters and pitchers.
    """
    caps = dict.fromkeys(HITTER_CAP_POSITIONS + PITCHER_CAP_POSITIONS, 0)
    bench = 0
    for slot in composition:
        match slot:
            case "C" | "1B" | "2B" | "3B" | "SS" | "SP" | "RP":
                caps[slot] += 1
            case "LF" | "CF" | "RF" | "OF":
                caps["OF"] += 1
            case "CI":
                caps["1B"] += 1
                caps["3B"] += 1
            case "MI":
                caps["2B"] += 1
                caps["SS"] += 1
            case "Util":
                for pos in HITTER_CAP_POSITIONS:
                    caps[pos] += 1
            case "P":
                caps["SP"] += 1
                caps["RP"] += 1
            case "BN":
                bench += 1

    bench_hitters = round_half_up(bench * _BENCH_HITTER_SHARE)
    bench_pitchers = bench - bench_hitters
    per_hitter_position = round_half_up(bench_hitters / len(HITTER_CAP_POSITIONS))
    for pos in HITTER_CAP_POSITIONS:
        caps[pos] += per_hitter_position
    bench_sp = round_half_up(bench_pitchers * _BENCH_SP_SHARE)
    caps["SP"] += bench_sp
    caps["RP"] += bench_pitchers - bench_sp
    return caps


def position_counts(roster: Sequence[RosterEntry], caps: dict[str, int]) -> dict[str, int]:
    """Assign each rostered player to one position.

    Pitchers count toward SP and/or RP. A hitter counts toward the eligible position with
    the lowest fill ratio, the first listed on ties.
    """
    counts = dict.fromkeys(HITTER_CAP_POSITIONS + PITCHER_CAP_POSITIONS, 0)
    for entry in roster:
        player = entry.player.player
        if player.kind is PlayerKind.PITCHER:
            if player.is_starter:
                counts["SP"] += 1
            if player.is_reliever:
                counts["RP"] += 1
            continue

        eligible = [p for p in dict.fromkeys(normalize_position(pos) for pos in player.positions) if p in counts]
        if not eligible:
            continue
        best = min(eligible, key=lambda pos: counts[pos] / (caps.get(pos) or 1))
        counts[best] += 1
    return counts


@dataclass(frozen=True)
class Recommendation:
    player: ValuedPlayer
    score: float
    base_score: float
    positional_multiplier: float = 1.0
    category_multiplier: float = 1.0
    is_need_fit: bool = False
    is_scarcity_pick: bool = False


@dataclass(frozen=True)
class PositionalFit:
    multiplier: float = 1.0
    is_need_fit: bool = False
    is_scarcity_pick: bool = False


class RecommendationScorer:
    """Scores players against a fixed snapshot of the draft.

    Caps, position counts, team innings and team category totals are computed once at
    construction, so scoring a whole pool does not rescan the roster per player.
    """

    def __init__(self, league: LeagueConfig, state: DraftState, scarcity: ScarcityTable) -> None:
        self._league = league
        self._state = state
        self._scarcity = scarcity
        self._roster = list(state.roster)
        self._caps = position_caps(league.roster_composition)
        self._counts = position_counts(self._roster, self._caps)
        self._team_ip = team_stats(self._roster).ip
        self._team_z = category_balance(self._roster, league)

    @property
    def caps(self) -> dict[str, int]:
        return self._caps

    @property
    def counts(self) -> dict[str, int]:
        return self._counts

    def weighted_score(self, player: ValuedPlayer) -> float:
        return weighted_z_total(player, self._league)

    def _top_tier(self, pos: str) -> int | None:
        return self._scarcity.get(pos, {}).get("t1")

    def _hitter_fit(self, player: ValuedPlayer) -> PositionalFit:
        eligible = [
            pos
            for pos in dict.fromkeys(normalize_position(p) for p in player.positions)
            if self._caps.get(pos, 0) > 0
        ]
        if not eligible:
            return PositionalFit()

        empty = [pos for pos in eligible if self._counts[pos] == 0]
        if empty:
            scarce = any((t1 := self._top_tier(pos)) is not None and t1 <= SCARCE_TOP_TIER for pos in empty)
            if scarce:
                return PositionalFit(EMPTY_SCARCE_MULTIPLIER, is_need_fit=True, is_scarcity_pick=True)
            return PositionalFit(EMPTY_SLOT_MULTIPLIER, is_need_fit=True)
        if any(self._counts[pos] < self._caps[pos] for pos in eligible):
            return PositionalFit(UNDER_CAP_MULTIPLIER, is_need_fit=True)
        return PositionalFit(SATURATED_MULTIPLIER)

    def _pitcher_fit(self, player: ValuedPlayer) -> PositionalFit:
        multiplier = 1.0
        proj = player.player
        if proj.is_starter and self._counts["SP"] >= self._caps["SP"]:
            multiplier = SATURATED_MULTIPLIER
        if proj.is_reliever and self._counts["RP"] >= self._caps["RP"]:
            multiplier = SATURATED_MULTIPLIER
        if proj.is_starter and self._team_ip > self._league.innings_limit * INNINGS_LIMIT_SHARE:
            multiplier = INNINGS_CAPPED_MULTIPLIER
        return PositionalFit(multiplier)

    def positional_multiplier(self, player: ValuedPlayer) -> PositionalFit:
        if player.kind is PlayerKind.PITCHER:
            fit = self._pitcher_fit(player)
        else:
            fit = self._hitter_fit(player)

        if fit.is_scarcity_pick:
            return fit
        for pos in scarcity_positions_for(player.positions, self._league.scoring_type):
            t1 = self._top_tier(pos)
            if t1 is not None and t1 <= VERY_SCARCE_TOP_TIER:
                return PositionalFit(
                    max(fit.multiplier, SECONDARY_SCARCITY_FLOOR),
                    is_need_fit=fit.is_need_fit,
                    is_scarcity_pick=True,
                )
        return fit

    def category_need_multiplier(self, player: ValuedPlayer) -> tuple[float, bool]:
        """Boost players strong where the roster is weak; returns ``(multiplier, is_need_fit)``."""
        if not self._roster:
            return 1.0, False

        active = [cat for cat in self._league.categories_for(player.kind) if self._league.weight(cat) > 0]
        if not active:
            return 1.0, False

        team_z = {cat: self._team_z.get(cat, 0.0) for cat in active}
        max_z = max(team_z.values())
        spread = max_z - min(team_z.values())
        if spread < BALANCED_SPREAD:
            return 1.0, False

        weighted = 0.0
        unweighted = 0.0
        for cat in active:
            need = (1 + NEED_SPREAD_WEIGHT * (max_z - team_z[cat]) / spread) * self._league.weight(cat)
            weighted += player.z(cat) * need
            unweighted += player.z(cat)

        if abs(unweighted) < NEUTRAL_Z_SUM:
            return 1.0, False
        multiplier = max(NEED_MULTIPLIER_MIN, min(NEED_MULTIPLIER_MAX, weighted / unweighted))
        return multiplier, multiplier > NEED_FIT_THRESHOLD

    def score(self, player: ValuedPlayer) -> Recommendation:
        base = self.weighted_score(player)
        fit = self.positional_multiplier(player)
        category, category_fit = self.category_need_multiplier(player)
        return Recommendation(
            player=player,
            score=base * fit.multiplier * category,
            base_score=base,
            positional_multiplier=fit.multiplier,
            category_multiplier=category,
            is_need_fit=fit.is_need_fit or category_fit,
            is_scarcity_pick=fit.is_scarcity_pick,
        )

    def rank(self, players: Iterable[ValuedPlayer], limit: int | None = DEFAULT_LIMIT) -> list[Recommendation]:
        scored = [self.score(p) for p in players if not self._state.is_taken(p.key)]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]


def best_available(
    players: Iterable[ValuedPlayer],
    state: DraftState,
    league: LeagueConfig,
    limit: int | None = DEFAULT_LIMIT,
) -> list[Recommendation]:
    """Available players by league-weighted z total, ignoring roster fit."""
    ranked: list[Recommendation] = []
    for player in players:
        if state.is_taken(player.key):
            continue
        score = weighted_z_total(player, league)
        ranked.append(Recommendation(player=player, score=score, base_score=score))
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked[:limit]


def smart_recommendations(
    players: Sequence[ValuedPlayer],
    state: DraftState,
    league: LeagueConfig,
    limit: int | None = DEFAULT_LIMIT,
) -> list[Recommendation]:
    """Available players scored for positional and category need."""
    scarcity = scarcity_table(
        players,
        state,
        scoring_type=league.scoring_type,
        auction=league.is_auction,
        tiers=default_tiers(league.is_auction),
    )
    scorer = RecommendationScorer(league, state, scarcity)
    ranked = scorer.rank(players, limit)
    logger.debug("Scored %d available players, roster size %d", len(players), len(state.roster))
    return ranked
