import dataclasses

import pytest

from fantasy_draft_assistant.domain.draft import DraftState, RosterEntry
from fantasy_draft_assistant.domain.league_settings import DEFAULT_ROSTER_COMPOSITION, ROTO_5X5, LeagueConfig
from fantasy_draft_assistant.domain.player import PlayerKind, PlayerProjection
from fantasy_draft_assistant.domain.valuation import ValuedPlayer
from fantasy_draft_assistant.draft.recommend import (
    RecommendationScorer,
    best_available,
    normalize_position,
    position_caps,
    position_counts,
    smart_recommendations,
)
from fantasy_draft_assistant.draft.scarcity import ScarcityTable


def _make_player(
    name: str,
    positions: tuple[str, ...],
    kind: PlayerKind = PlayerKind.HITTER,
    category_z: dict[str, float] | None = None,
    stats: dict[str, float] | None = None,
    z_total: float = 0.0,
) -> ValuedPlayer:
    proj = PlayerProjection(name=name, team="SEA", kind=kind, positions=positions, stats=stats or {})
    return ValuedPlayer(player=proj, category_z=category_z or {}, z_total=z_total)


def _state(*roster: ValuedPlayer) -> DraftState:
    state = DraftState()
    for player in roster:
        state.taken.add(player.key)
        state.roster.append(RosterEntry(player=player))
    return state


def _scorer(
    *roster: ValuedPlayer,
    league: LeagueConfig = ROTO_5X5,
    scarcity: ScarcityTable | None = None,
) -> RecommendationScorer:
    return RecommendationScorer(league, _state(*roster), scarcity or {})


class TestNormalizePosition:
    def test_outfield(self) -> None:
        assert normalize_position("CF") == "OF"
        assert normalize_position(" LF ") == "OF"

    def test_other_positions_unchanged(self) -> None:
        assert normalize_position("SS") == "SS"


class TestPositionCaps:
    def test_default_composition(self) -> None:
        caps = position_caps(DEFAULT_ROSTER_COMPOSITION)
        assert caps == {"C": 3, "1B": 4, "2B": 4, "3B": 4, "SS": 4, "OF": 6, "SP": 7, "RP": 6}

    def test_no_bench(self) -> None:
        caps = position_caps(("C", "SS", "SP"))
        assert caps["C"] == 1
        assert caps["SS"] == 1
        assert caps["1B"] == 0
        assert caps["SP"] == 1
        assert caps["RP"] == 0


class TestPositionCounts:
    def test_hitter_counts_once_at_least_filled(self) -> None:
        caps = {"C": 1, "1B": 2, "2B": 1, "3B": 1, "SS": 1, "OF": 3, "SP": 0, "RP": 0}
        roster = [
            RosterEntry(player=_make_player("A", ("1B",))),
            RosterEntry(player=_make_player("B", ("1B", "OF"))),
        ]
        counts = position_counts(roster, caps)
        assert counts["1B"] == 1
        assert counts["OF"] == 1

    def test_pitchers_count_by_role(self) -> None:
        roster = [RosterEntry(player=_make_player("P", ("SP", "RP"), PlayerKind.PITCHER))]
        counts = position_counts(roster, position_caps(DEFAULT_ROSTER_COMPOSITION))
        assert counts["SP"] == 1
        assert counts["RP"] == 1


class TestPositionalMultiplier:
    def test_empty_slot(self) -> None:
        fit = _scorer().positional_multiplier(_make_player("SS", ("SS",)))
        assert fit.multiplier == pytest.approx(1.4)
        assert fit.is_need_fit
        assert not fit.is_scarcity_pick

    def test_empty_and_scarce(self) -> None:
        fit = _scorer(scarcity={"SS": {"t1": 4}}).positional_multiplier(_make_player("SS", ("SS",)))
        assert fit.multiplier == pytest.approx(1.6)
        assert fit.is_scarcity_pick

    def test_under_cap(self) -> None:
        scorer = _scorer(_make_player("Mine", ("SS",)))
        fit = scorer.positional_multiplier(_make_player("SS", ("SS",)))
        assert fit.multiplier == pytest.approx(1.2)
        assert fit.is_need_fit

    def test_saturated(self) -> None:
        league = dataclasses.replace(ROTO_5X5, roster_composition=("SS",))
        scorer = _scorer(_make_player("Mine", ("SS",)), league=league)
        fit = scorer.positional_multiplier(_make_player("SS", ("SS",)))
        assert fit.multiplier == pytest.approx(0.8)
        assert not fit.is_need_fit

    def test_secondary_scarcity_floor(self) -> None:
        league = dataclasses.replace(ROTO_5X5, roster_composition=("SS",))
        scorer = _scorer(_make_player("Mine", ("SS",)), league=league, scarcity={"MI": {"t1": 2}})
        fit = scorer.positional_multiplier(_make_player("SS", ("SS",)))
        assert fit.multiplier == pytest.approx(1.15)
        assert fit.is_scarcity_pick

    def test_no_capped_position(self) -> None:
        fit = _scorer().positional_multiplier(_make_player("DH", ("DH",)))
        assert fit.multiplier == 1.0

    def test_outfield_variants_share_cap(self) -> None:
        fit = _scorer(_make_player("Mine", ("LF",))).positional_multiplier(_make_player("CF", ("CF",)))
        assert fit.multiplier == pytest.approx(1.2)

    def test_starter_slots_full(self) -> None:
        league = dataclasses.replace(ROTO_5X5, roster_composition=("SP", "RP"))
        scorer = _scorer(_make_player("Mine", ("SP",), PlayerKind.PITCHER), league=league)
        assert scorer.positional_multiplier(_make_player("SP", ("SP",), PlayerKind.PITCHER)).multiplier == 0.8
        assert scorer.positional_multiplier(_make_player("RP", ("RP",), PlayerKind.PITCHER)).multiplier == 1.0

    def test_innings_cap(self) -> None:
        ace = _make_player("Mine", ("SP",), PlayerKind.PITCHER, stats={"ip": 1300.0})
        scorer = _scorer(ace)
        assert scorer.positional_multiplier(_make_player("SP", ("SP",), PlayerKind.PITCHER)).multiplier == 0.5
        assert scorer.positional_multiplier(_make_player("RP", ("RP",), PlayerKind.PITCHER)).multiplier == 1.0


class TestCategoryNeedMultiplier:
    def _lopsided(self) -> RecommendationScorer:
        return _scorer(_make_player("Mine", ("DH",), category_z={"r": 2.0}))

    def test_empty_roster_is_neutral(self) -> None:
        scorer = _scorer()
        assert scorer.category_need_multiplier(_make_player("A", ("OF",), category_z={"hr": 3.0})) == (1.0, False)

    def test_boosts_weak_category(self) -> None:
        multiplier, need_fit = self._lopsided().category_need_multiplier(
            _make_player("A", ("OF",), category_z={"hr": 1.0})
        )
        assert multiplier == pytest.approx(1.5)
        assert need_fit

    def test_strong_category_not_boosted(self) -> None:
        multiplier, need_fit = self._lopsided().category_need_multiplier(
            _make_player("A", ("OF",), category_z={"r": 1.0})
        )
        assert multiplier == pytest.approx(1.0)
        assert not need_fit

    def test_mixed(self) -> None:
        multiplier, need_fit = self._lopsided().category_need_multiplier(
            _make_player("A", ("OF",), category_z={"r": 1.0, "hr": 1.0})
        )
        assert multiplier == pytest.approx(1.25)
        assert need_fit

    def test_clamped(self) -> None:
        multiplier, _ = self._lopsided().category_need_multiplier(
            _make_player("A", ("OF",), category_z={"r": -1.5, "hr": 2.0})
        )
        assert multiplier == pytest.approx(1.5)

    def test_neutral_player(self) -> None:
        result = self._lopsided().category_need_multiplier(
            _make_player("A", ("OF",), category_z={"r": 1.0, "hr": -1.0})
        )
        assert result == (1.0, False)

    def test_balanced_roster(self) -> None:
        scorer = _scorer(_make_player("Mine", ("DH",), category_z={"r": 0.2}))
        assert scorer.category_need_multiplier(_make_player("A", ("OF",), category_z={"hr": 1.0})) == (1.0, False)


class TestBestAvailable:
    def test_orders_by_weighted_z_and_skips_taken(self) -> None:
        players = [
            _make_player("A", ("OF",), category_z={"hr": 1.0}),
            _make_player("B", ("OF",), category_z={"hr": 3.0}),
            _make_player("C", ("OF",), category_z={"hr": 2.0}),
        ]
        state = DraftState(taken={players[1].key})
        ranked = best_available(players, state, ROTO_5X5, limit=5)
        assert [r.player.name for r in ranked] == ["C", "A"]
        assert ranked[0].score == pytest.approx(2.0)

    def test_limit(self) -> None:
        players = [_make_player(f"P{i}", ("OF",), category_z={"hr": float(i)}) for i in range(10)]
        assert len(best_available(players, DraftState(), ROTO_5X5, limit=3)) == 3

    def test_category_weights_apply(self) -> None:
        league = dataclasses.replace(ROTO_5X5, category_weights={"sb": 0.0})
        players = [
            _make_player("Speed", ("OF",), category_z={"sb": 4.0}),
            _make_player("Power", ("OF",), category_z={"hr": 1.0}),
        ]
        ranked = best_available(players, DraftState(), league)
        assert [r.player.name for r in ranked] == ["Power", "Speed"]


class TestSmartRecommendations:
    def test_scores_available_players(self) -> None:
        players = [
            _make_player("A", ("SS",), category_z={"r": 3.0}, z_total=3.0),
            _make_player("B", ("OF",), category_z={"r": 2.5}, z_total=2.5),
            _make_player("C", ("SP",), PlayerKind.PITCHER, category_z={"k": 5.0}, z_total=5.0),
        ]
        state = DraftState(taken={players[2].key})
        ranked = smart_recommendations(players, state, ROTO_5X5)
        assert [r.player.name for r in ranked] == ["A", "B"]
        assert ranked[0].base_score == pytest.approx(3.0)
        assert ranked[0].score == pytest.approx(3.0 * 1.6)
        assert ranked[0].is_scarcity_pick
        assert ranked[0].is_need_fit

    def test_empty_roster_category_multiplier(self) -> None:
        players = [_make_player("A", ("OF",), category_z={"hr": 2.0}, z_total=2.0)]
        ranked = smart_recommendations(players, DraftState(), ROTO_5X5)
        assert ranked[0].category_multiplier == 1.0
