import tomllib
from pathlib import Path
from typing import Any

from fantasy_draft_assistant.domain.league_settings import (
    DEFAULT_INVERTED,
    DEFAULT_ROSTER_COMPOSITION,
    LEAGUE_PRESETS,
    DraftMode,
    LeagueConfig,
    ScoringType,
)

_CONFIG_FILENAME = "fda.toml"


class LeagueConfigError(Exception):
    """Raised when league configuration is invalid or missing."""


# -- Validation --------------------------------------------------------------


def validate_league(league: LeagueConfig) -> None:
    if league.teams <= 0:
        raise LeagueConfigError(f"League '{league.name}': teams must be > 0, got {league.teams}")
    if league.budget < 0:
        raise LeagueConfigError(f"League '{league.name}': budget must be >= 0, got {league.budget}")
    if not league.hitting_categories:
        raise LeagueConfigError(f"League '{league.name}': hitting_categories must not be empty")
    if not league.pitching_categories:
        raise LeagueConfigError(f"League '{league.name}': pitching_categories must not be empty")

    if len(league.hitting_categories) != len(set(league.hitting_categories)):
        raise LeagueConfigError(f"League '{league.name}': duplicate hitting categories")
    if len(league.pitching_categories) != len(set(league.pitching_categories)):
        raise LeagueConfigError(f"League '{league.name}': duplicate pitching categories")

    hitter_share, pitcher_share = league.hitter_pitcher_split
    if hitter_share < 0 or pitcher_share < 0 or hitter_share + pitcher_share != 100:
        raise LeagueConfigError(
            f"League '{league.name}': hitter_pitcher_split must be two non-negative shares summing to 100"
        )
    if league.innings_limit < 0:
        raise LeagueConfigError(f"League '{league.name}': innings_limit must be >= 0")

    for category, weight in league.category_weights.items():
        if weight < 0:
            raise LeagueConfigError(f"League '{league.name}': weight for '{category}' must be >= 0")


# -- Parsing -----------------------------------------------------------------


def _require_field(raw: dict[str, Any], field: str, context: str) -> Any:
    if field not in raw:
        raise LeagueConfigError(f"{context}: missing required field '{field}'")
    return raw[field]


def _categories(raw: Any, field: str, context: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(c, str) for c in raw):
        raise LeagueConfigError(f"{context}: '{field}' must be a list of category names")
    return tuple(c.strip().lower() for c in raw)


def parse_league(name: str, raw: dict[str, Any]) -> LeagueConfig:
    context = f"League '{name}'"

    teams = _require_field(raw, "teams", context)
    if not isinstance(teams, int) or isinstance(teams, bool):
        raise LeagueConfigError(f"{context}: 'teams' must be an integer")
    hitting = _categories(_require_field(raw, "hitting_categories", context), "hitting_categories", context)
    pitching = _categories(_require_field(raw, "pitching_categories", context), "pitching_categories", context)

    raw_mode = raw.get("draft_mode", DraftMode.SNAKE.value)
    try:
        draft_mode = DraftMode(raw_mode)
    except ValueError:
        raise LeagueConfigError(f"{context}: invalid draft_mode '{raw_mode}'")

    raw_scoring = raw.get("scoring_type", ScoringType.ROTO.value)
    try:
        scoring_type = ScoringType(raw_scoring)
    except ValueError:
        raise LeagueConfigError(f"{context}: invalid scoring_type '{raw_scoring}'")

    raw_split = raw.get("hitter_pitcher_split", [60, 40])
    if not isinstance(raw_split, list) or len(raw_split) != 2:
        raise LeagueConfigError(f"{context}: hitter_pitcher_split must be a two-element list")

    raw_weights = raw.get("category_weights", {})
    if not isinstance(raw_weights, dict):
        raise LeagueConfigError(f"{context}: category_weights must be a table")

    league = LeagueConfig(
        name=name,
        hitting_categories=hitting,
        pitching_categories=pitching,
        inverted_categories=frozenset(
            _categories(raw.get("inverted_categories", sorted(DEFAULT_INVERTED)), "inverted_categories", context)
        ),
        roster_composition=tuple(raw.get("roster_composition", DEFAULT_ROSTER_COMPOSITION)),
        teams=teams,
        budget=raw.get("budget", 260),
        draft_mode=draft_mode,
        scoring_type=scoring_type,
        hitter_pitcher_split=(int(raw_split[0]), int(raw_split[1])),
        innings_limit=float(raw.get("innings_limit", 1350)),
        roster_hitters=raw.get("roster_hitters", 12),
        roster_pitchers=raw.get("roster_pitchers", 8),
        category_weights={str(k).lower(): float(v) for k, v in raw_weights.items()},
    )

    validate_league(league)
    return league


# -- TOML loading ------------------------------------------------------------


def _league_tables(config_dir: Path) -> dict[str, Any] | None:
    """The ``[leagues]`` tables of ``fda.toml``, or None when the file is absent."""
    toml_path = config_dir / _CONFIG_FILENAME
    if not toml_path.is_file():
        return None
    try:
        data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise LeagueConfigError(f"{toml_path}: {e}") from e
    leagues = data.get("leagues")
    if leagues is not None and not isinstance(leagues, dict):
        raise LeagueConfigError(f"{toml_path}: 'leagues' must be a table")
    return leagues if leagues is not None else {}


def load_league(name: str, config_dir: Path) -> LeagueConfig:
    leagues = _league_tables(config_dir)
    if leagues is None:
        raise LeagueConfigError(f"{_CONFIG_FILENAME} not found in {config_dir}")
    if not leagues:
        raise LeagueConfigError(f"No [leagues] section in {_CONFIG_FILENAME}")
    if name not in leagues:
        raise LeagueConfigError(f"League '{name}' not found in {_CONFIG_FILENAME}")
    return parse_league(name, leagues[name])


def list_leagues(config_dir: Path) -> list[str]:
    return sorted(_league_tables(config_dir) or {})


def resolve_league(name: str, config_dir: Path) -> LeagueConfig:
    """A league from ``fda.toml`` when defined there, otherwise a built-in preset."""
    if name in list_leagues(config_dir):
        return load_league(name, config_dir)
    if name in LEAGUE_PRESETS:
        return LEAGUE_PRESETS[name]
    raise LeagueConfigError(f"League '{name}' is neither in {_CONFIG_FILENAME} nor a built-in preset")
