import pytest

from fantasy_draft_assistant.domain.player import PlayerKind, PlayerProjection
from fantasy_draft_assistant.domain.valuation import ValuedPlayer
from fantasy_draft_assistant.valuation.dollars import (
    adjusted_points,
    compute_dollar_values,
    price_per_point,
    replacement_index,
)
from fantasy_draft_assistant.valuation.models import round_half_up


def _valued(name: str, z_total: float) -> ValuedPlayer:
    proj = PlayerProjection(name=name, team="BOS", kind=PlayerKind.HITTER, positions=("1B",))
    return ValuedPlayer(player=proj, z_total=z_total)


class TestAdjustedPoints:
    def test_below_replacement_is_zero(self) -> None:
        assert adjusted_points(1.0, 2.0) == 0.0

    def test_exponent_curve(self) -> None:
        assert adjusted_points(18.0, 2.0, exponent=1.25) == pytest.approx(16.0**1.25)

    def test_linear_with_unit_exponent(self) -> None:
        assert adjusted_points(5.0, 2.0, exponent=1.0) == pytest.approx(3.0)


class TestPricePerPoint:
    def test_reserves_min_bid_per_slot(self) -> None:
        assert price_per_point(2600.0, 100, 1250.0) == pytest.approx(2.0)

    def test_no_points(self) -> None:
        assert price_per_point(2600.0, 100, 0.0) == 0.0

    def test_budget_smaller_than_reserve(self) -> None:
        assert price_per_point(50.0, 100, 10.0) == 0.0


class TestReplacementIndex:
    def test_last_draftable(self) -> None:
        assert replacement_index(300, 100) == 99

    def test_short_pool(self) -> None:
        assert replacement_index(40, 100) == 39


class TestRoundHalfUp:
    def test_half_rounds_up(self) -> None:
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self) -> None:
        assert round_half_up(2.49) == 2


class TestComputeDollarValues:
    def _pool(self) -> list[ValuedPlayer]:
        # 25 players 50 points above replacement, 75 at replacement level.
        stars = [_valued(f"Star {i}", 50.0) for i in range(25)]
        fillers = [_valued(f"Filler {i}", 0.0) for i in range(75)]
        return fillers + stars

    def test_price_from_points(self) -> None:
        result = compute_dollar_values(self._pool(), 2600.0, team_count=10, roster_slots=10, exponent=1.0)
        assert result[0].adjusted_points == pytest.approx(50.0)
        assert result[0].dollar_value == 101

    def test_sorted_by_z_total(self) -> None:
        result = compute_dollar_values(self._pool(), 2600.0, team_count=10, roster_slots=10, exponent=1.0)
        z_totals = [p.z_total for p in result]
        assert z_totals == sorted(z_totals, reverse=True)

    def test_replacement_player_gets_min_bid(self) -> None:
        result = compute_dollar_values(self._pool(), 2600.0, team_count=10, roster_slots=10, exponent=1.0)
        replacement = result[99]
        assert replacement.adjusted_points == 0.0
        assert replacement.dollar_value == 1

    def test_undraftable_players_are_worthless(self) -> None:
        pool = [_valued("A", 3.0), _valued("B", 2.0), _valued("C", 1.0), _valued("D", 0.5)]
        result = compute_dollar_values(pool, 100.0, team_count=1, roster_slots=2)
        assert [p.dollar_value for p in result[2:]] == [0, 0]
        assert result[1].dollar_value == 1
        assert result[0].dollar_value == 99

    def test_empty_pool(self) -> None:
        assert compute_dollar_values([], 2600.0, team_count=10, roster_slots=10) == []
