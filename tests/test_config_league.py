import dataclasses
from pathlib import Path

import pytest

from fantasy_draft_assistant.config_league import (
    LeagueConfigError,
    list_leagues,
    load_league,
    parse_league,
    resolve_league,
    validate_league,
)
from fantasy_draft_assistant.domain.league_settings import (
    DEFAULT_INVERTED,
    DEFAULT_ROSTER_COMPOSITION,
    H2H_6X6,
    ROTO_5X5,
    DraftMode,
    ScoringType,
)

# -- Fixtures ----------------------------------------------------------------

_TOML = """\
[leagues.home]
teams = 10
draft_mode = "auction"
scoring_type = "head"
budget = 300
hitting_categories = ["R", "HR", "RBI", "SB", "OBP"]
pitching_categories = ["W", "K", "ERA", "WHIP", "QS"]
hitter_pitcher_split = [65, 35]

[leagues.home.category_weights]
sb = 0.5

[leagues.keeper]
teams = 12
hitting_categories = ["r", "hr"]
pitching_categories = ["w", "k"]
"""


def _raw(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "teams": 12,
        "hitting_categories": ["r", "hr", "rbi", "sb", "avg"],
        "pitching_categories": ["w", "sv", "k", "era", "whip"],
    }
    raw.update(overrides)
    return raw


def _write_toml(tmp_path: Path, text: str = _TOML) -> Path:
    (tmp_path / "fda.toml").write_text(text)
    return tmp_path


# -- validate_league ---------------------------------------------------------


class TestValidateLeague:
    def test_presets_are_valid(self) -> None:
        validate_league(ROTO_5X5)
        validate_league(H2H_6X6)

    def test_zero_teams(self) -> None:
        with pytest.raises(LeagueConfigError, match="teams"):
            validate_league(dataclasses.replace(ROTO_5X5, teams=0))

    def test_negative_budget(self) -> None:
        with pytest.raises(LeagueConfigError, match="budget"):
            validate_league(dataclasses.replace(ROTO_5X5, budget=-1))

    def test_empty_categories(self) -> None:
        with pytest.raises(LeagueConfigError, match="hitting_categories"):
            validate_league(dataclasses.replace(ROTO_5X5, hitting_categories=()))

    def test_duplicate_categories(self) -> None:
        with pytest.raises(LeagueConfigError, match="duplicate pitching"):
            validate_league(dataclasses.replace(ROTO_5X5, pitching_categories=("w", "w")))

    def test_split_must_sum_to_100(self) -> None:
        with pytest.raises(LeagueConfigError, match="hitter_pitcher_split"):
            validate_league(dataclasses.replace(ROTO_5X5, hitter_pitcher_split=(70, 40)))

    def test_negative_weight(self) -> None:
        with pytest.raises(LeagueConfigError, match="'sb'"):
            validate_league(dataclasses.replace(ROTO_5X5, category_weights={"sb": -1.0}))


# -- parse_league ------------------------------------------------------------


class TestParseLeague:
    def test_minimal_uses_defaults(self) -> None:
        league = parse_league("mine", _raw())
        assert league.name == "mine"
        assert league.teams == 12
        assert league.draft_mode is DraftMode.SNAKE
        assert league.scoring_type is ScoringType.ROTO
        assert league.budget == 260
        assert league.hitter_pitcher_split == (60, 40)
        assert league.inverted_categories == DEFAULT_INVERTED
        assert league.roster_composition == DEFAULT_ROSTER_COMPOSITION

    def test_categories_lowercased(self) -> None:
        league = parse_league("mine", _raw(hitting_categories=["R", "HR"]))
        assert league.hitting_categories == ("r", "hr")

    def test_missing_teams(self) -> None:
        raw = _raw()
        del raw["teams"]
        with pytest.raises(LeagueConfigError, match="missing required field 'teams'"):
            parse_league("mine", raw)

    def test_teams_must_be_integer(self) -> None:
        with pytest.raises(LeagueConfigError, match="'teams' must be an integer"):
            parse_league("mine", _raw(teams="twelve"))

    def test_categories_must_be_list(self) -> None:
        with pytest.raises(LeagueConfigError, match="must be a list"):
            parse_league("mine", _raw(pitching_categories="w,k"))

    def test_invalid_draft_mode(self) -> None:
        with pytest.raises(LeagueConfigError, match="invalid draft_mode"):
            parse_league("mine", _raw(draft_mode="keeper"))

    def test_invalid_scoring_type(self) -> None:
        with pytest.raises(LeagueConfigError, match="invalid scoring_type"):
            parse_league("mine", _raw(scoring_type="points"))

    def test_split_shape(self) -> None:
        with pytest.raises(LeagueConfigError, match="two-element"):
            parse_league("mine", _raw(hitter_pitcher_split=[100]))

    def test_weights_lowercased(self) -> None:
        league = parse_league("mine", _raw(category_weights={"SB": 0.5}))
        assert league.weight("sb") == 0.5
        assert league.weight("hr") == 1.0


# -- TOML loading ------------------------------------------------------------


class TestLoadLeague:
    def test_load(self, tmp_path: Path) -> None:
        league = load_league("home", _write_toml(tmp_path))
        assert league.teams == 10
        assert league.is_auction
        assert league.scoring_type is ScoringType.HEAD
        assert league.budget == 300
        assert league.hitting_categories == ("r", "hr", "rbi", "sb", "obp")
        assert league.hitter_pitcher_split == (65, 35)
        assert league.weight("sb") == 0.5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LeagueConfigError, match="not found"):
            load_league("home", tmp_path)

    def test_missing_league(self, tmp_path: Path) -> None:
        with pytest.raises(LeagueConfigError, match="'other' not found"):
            load_league("other", _write_toml(tmp_path))

    def test_no_leagues_section(self, tmp_path: Path) -> None:
        with pytest.raises(LeagueConfigError, match=r"No \[leagues\]"):
            load_league("home", _write_toml(tmp_path, "[other]\nx = 1\n"))

    def test_malformed_toml(self, tmp_path: Path) -> None:
        with pytest.raises(LeagueConfigError, match="fda.toml"):
            load_league("home", _write_toml(tmp_path, "[leagues.home\nteams = 1\n"))

    def test_list_leagues(self, tmp_path: Path) -> None:
        assert list_leagues(_write_toml(tmp_path)) == ["home", "keeper"]

    def test_list_leagues_without_file(self, tmp_path: Path) -> None:
        assert list_leagues(tmp_path) == []


class TestResolveLeague:
    def test_prefers_toml(self, tmp_path: Path) -> None:
        extra = '\n[leagues.roto5x5]\nteams = 8\nhitting_categories = ["hr"]\npitching_categories = ["k"]\n'
        _write_toml(tmp_path, _TOML + extra)
        assert resolve_league("roto5x5", tmp_path).teams == 8

    def test_falls_back_to_preset(self, tmp_path: Path) -> None:
        assert resolve_league("h2h12", tmp_path) is H2H_6X6

    def test_unknown(self, tmp_path: Path) -> None:
        with pytest.raises(LeagueConfigError, match="neither"):
            resolve_league("nope", tmp_path)
