"""Count the players still available at each position, bucketed into value tiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fantasy_draft_assistant.domain.league_settings import ScoringType

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from fantasy_draft_assistant.domain.draft import DraftState
    from fantasy_draft_assistant.domain.valuation import ValuedPlayer

type ScarcityTable = dict[str, dict[str, int]]

AUCTION_TIERS: tuple[float, ...] = (30, 20, 15, 10, 5, 3)
SNAKE_TIERS: tuple[float, ...] = (8, 6, 5, 3, 2, 1, 0)

BASE_POSITIONS: tuple[str, ...] = ("C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "OF", "SP", "RP", "DH")
ROTO_POSITIONS: tuple[str, ...] = ("CI", "MI")

_OUTFIELD = frozenset({"LF", "CF", "RF"})
_CORNER_INFIELD = frozenset({"1B", "3B"})
_MIDDLE_INFIELD = frozenset({"2B", "SS"})


def tier_key(index: int) -> str:
    return f"t{index + 1}"


def default_tiers(auction: bool) -> tuple[float, ...]:
    return AUCTION_TIERS if auction else SNAKE_TIERS


def tracked_positions(scoring_type: ScoringType) -> tuple[str, ...]:
    if scoring_type is ScoringType.ROTO:
        return BASE_POSITIONS + ROTO_POSITIONS
    return BASE_POSITIONS


def scarcity_positions_for(positions: Iterable[str], scoring_type: ScoringType) -> set[str]:
    """Tracked positions a player counts toward, including OF and CI/MI aggregates."""
    tracked = set(tracked_positions(scoring_type))
    qualifies: set[str] = set()
    for pos in positions:
        if pos in tracked:
            qualifies.add(pos)
        if pos in _OUTFIELD:
            qualifies.add("OF")
        if scoring_type is ScoringType.ROTO:
            if pos in _CORNER_INFIELD:
                qualifies.add("CI")
            if pos in _MIDDLE_INFIELD:
                qualifies.add("MI")
    return qualifies


def scarcity_table(
    players: Iterable[ValuedPlayer],
    state: DraftState,
    *,
    scoring_type: ScoringType,
    auction: bool,
    tiers: Sequence[float] | None = None,
) -> ScarcityTable:
    """Per position, how many available players reach each tier threshold.

    The metric is the dollar value in auction drafts and ``z_total`` otherwise. Tiers
    are thresholds in descending order; a player counts toward every tier whose threshold
    they reach, so counts never decrease from ``t1`` to the last tier.
    """
    thresholds = tuple(tiers) if tiers is not None else default_tiers(auction)
    table: ScarcityTable = {
        pos: {tier_key(i): 0 for i in range(len(thresholds))} for pos in tracked_positions(scoring_type)
    }
    if not thresholds:
        return table
    floor = thresholds[-1]

    for player in players:
        if state.is_taken(player.key):
            continue
        metric = float(player.dollar_value) if auction else player.z_total
        if metric < floor:
            continue
        for pos in scarcity_positions_for(player.positions, scoring_type):
            counts = table[pos]
            for i, threshold in enumerate(thresholds):
                if metric >= threshold:
                    counts[tier_key(i)] += 1
    return table
