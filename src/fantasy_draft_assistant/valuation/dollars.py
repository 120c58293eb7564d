from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from fantasy_draft_assistant.valuation.models import DEFAULT_AUCTION_EXPONENT, round_half_up

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_assistant.domain.valuation import ValuedPlayer

logger = logging.getLogger(__name__)


def replacement_index(pool_size: int, total_draftable: int) -> int:
    return min(total_draftable - 1, pool_size - 1)


def adjusted_points(z_total: float, replacement_z: float, exponent: float = DEFAULT_AUCTION_EXPONENT) -> float:
    """Points above replacement on the exponential curve; never negative."""
    z_diff = max(0.0, z_total - replacement_z)
    return z_diff**exponent


def price_per_point(budget_pool: float, total_draftable: int, total_points: float, min_bid: int = 1) -> float:
    """Dollars per adjusted point once every draftable slot has its minimum bid."""
    if total_points <= 0.0:
        return 0.0
    return max(0.0, budget_pool - total_draftable * min_bid) / total_points


def compute_dollar_values(
    players: Sequence[ValuedPlayer],
    budget_pool: float,
    team_count: int,
    roster_slots: int,
    *,
    exponent: float = DEFAULT_AUCTION_EXPONENT,
    min_bid: int = 1,
) -> list[ValuedPlayer]:
    """Price a z-scored pool for an auction draft.

    ``budget_pool`` is the league-wide money available for this player kind and
    ``roster_slots`` the number of slots each team fills with it. Every draftable slot
    reserves ``min_bid``; the surplus is split in proportion to adjusted points above
    the replacement player (the last draftable one).

    Returns the players sorted by ``z_total`` descending, with ``adjusted_points`` and
    ``dollar_value`` set.
    """
    if not players:
        return []

    ordered = sorted(players, key=lambda p: p.z_total, reverse=True)
    total_draftable = team_count * roster_slots
    replacement_z = ordered[replacement_index(len(ordered), total_draftable)].z_total if total_draftable > 0 else 0.0

    points = [adjusted_points(p.z_total, replacement_z, exponent) for p in ordered]
    total_points = sum(points)

    per_point = price_per_point(budget_pool, total_draftable, total_points, min_bid)
    logger.debug(
        "Pricing %d players: replacement z=%.2f, $%.3f per point",
        len(ordered),
        replacement_z,
        per_point,
    )

    result: list[ValuedPlayer] = []
    for rank, (player, pts) in enumerate(zip(ordered, points, strict=True)):
        if pts > 0.0:
            dollars = round_half_up(min_bid + pts * per_point)
        elif rank < total_draftable:
            dollars = min_bid
        else:
            dollars = 0
        result.append(dataclasses.replace(player, adjusted_points=pts, dollar_value=dollars))
    return result


