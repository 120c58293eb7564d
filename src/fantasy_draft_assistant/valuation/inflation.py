from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_assistant.domain.draft import DraftState
    from fantasy_draft_assistant.domain.league_settings import LeagueConfig
    from fantasy_draft_assistant.domain.valuation import ValuedPlayer


@dataclass(frozen=True)
class InflationStats:
    total_money: float
    total_value: float
    money_spent: float
    value_gone: float
    money_remaining: float
    value_remaining: float
    inflation_rate: float
    draft_progress: float


def compute_inflation(
    players: Sequence[ValuedPlayer],
    state: DraftState,
    league: LeagueConfig,
) -> InflationStats | None:
    """Compare money left in the auction with system value left on the board.

    An inflation rate above 1.0 means teams hold more money than the remaining players
    are worth, so prices should run above their listed values.
    """
    if not players:
        return None

    total_spots = league.teams * (league.roster_hitters + league.roster_pitchers)
    total_money = float(league.teams * league.budget)

    draftable = sorted(players, key=lambda p: p.dollar_value, reverse=True)[:total_spots]
    total_value = float(sum(max(0, p.dollar_value) for p in draftable))

    current = {(p.name, p.team): p.dollar_value for p in players}
    money_spent = 0.0
    value_gone = 0.0
    for pick in state.picks:
        money_spent += pick.cost
        system_value = current.get((pick.player.name, pick.player.team), pick.player.dollar_value)
        value_gone += max(0, system_value)

    money_remaining = total_money - money_spent
    value_remaining = total_value - value_gone
    inflation_rate = money_remaining / value_remaining if value_remaining > 0 else 1.0

    return InflationStats(
        total_money=total_money,
        total_value=total_value,
        money_spent=money_spent,
        value_gone=value_gone,
        money_remaining=money_remaining,
        value_remaining=value_remaining,
        inflation_rate=inflation_rate,
        draft_progress=len(state.picks) / total_spots if total_spots > 0 else 0.0,
    )
