import json
from pathlib import Path
from typing import Annotated, Any

import typer

from fantasy_draft_assistant.cli._logging import configure_logging
from fantasy_draft_assistant.cli._output import (
    console,
    print_draft_result,
    print_error,
    print_inflation,
    print_player_values,
    print_recommendations,
    print_scarcity,
    print_team_stats,
)
from fantasy_draft_assistant.config import (
    create_config,
    load_draft_settings,
    load_scarcity_tiers,
    load_valuation_tuning,
)
from fantasy_draft_assistant.config_league import LeagueConfigError, resolve_league
from fantasy_draft_assistant.domain.draft import DraftState
from fantasy_draft_assistant.domain.league_settings import LeagueConfig
from fantasy_draft_assistant.domain.player import PlayerKind
from fantasy_draft_assistant.domain.valuation import ValuedPlayer
from fantasy_draft_assistant.draft.recommend import best_available, smart_recommendations
from fantasy_draft_assistant.draft.scarcity import scarcity_table
from fantasy_draft_assistant.draft.team import team_stats
from fantasy_draft_assistant.draft.tracker import DraftStateTracker
from fantasy_draft_assistant.projections import build_players
from fantasy_draft_assistant.valuation.inflation import compute_inflation
from fantasy_draft_assistant.valuation.pipeline import value_league

app = typer.Typer(name="fda", help="Fantasy draft assistant: player valuation and live draft tracking")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    log_file: Annotated[Path | None, typer.Option("--log-file", help="Also write DEBUG logs to this file")] = None,
) -> None:
    """Fantasy draft assistant: player valuation and live draft tracking."""
    configure_logging(verbose=verbose, log_file=log_file)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_HittersArg = Annotated[Path, typer.Argument(help="JSON list of hitter projection records")]
_PitchersArg = Annotated[Path, typer.Argument(help="JSON list of pitcher projection records")]
_LeagueOpt = Annotated[str, typer.Option("--league", help="League name from fda.toml or a built-in preset")]
_ConfigDirOpt = Annotated[Path, typer.Option("--config-dir", help="Directory containing fda.toml")]
_ConfigFileOpt = Annotated[str, typer.Option("--config", help="YAML file with tuning settings")]
_StateOpt = Annotated[Path | None, typer.Option("--state", help="Draft state JSON file")]
_TopOpt = Annotated[int | None, typer.Option("--top", help="Show top N players")]


def _read_json(path: Path) -> Any:
    with path.open() as f:
        return json.load(f)


def _load_state(path: Path | None) -> DraftState:
    if path is None or not path.exists():
        return DraftState()
    return DraftState.from_dict(_read_json(path))


def _load_pool(
    hitters: Path,
    pitchers: Path,
    league_name: str,
    config_dir: Path,
    config_file: str,
) -> tuple[LeagueConfig, list[ValuedPlayer]]:
    try:
        league = resolve_league(league_name, config_dir)
        hitter_records = _read_json(hitters)
        pitcher_records = _read_json(pitchers)
    except (LeagueConfigError, FileNotFoundError, json.JSONDecodeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    tuning = load_valuation_tuning(create_config(yaml_path=config_file))
    players = value_league(
        build_players(hitter_records, PlayerKind.HITTER),
        build_players(pitcher_records, PlayerKind.PITCHER),
        league,
        tuning,
    )
    return league, players


@app.command()
def values(
    hitters: _HittersArg,
    pitchers: _PitchersArg,
    league_name: _LeagueOpt = "roto5x5",
    config_dir: _ConfigDirOpt = Path("."),
    config_file: _ConfigFileOpt = "config.yaml",
    top: _TopOpt = None,
) -> None:
    """Value and rank the player pool."""
    league, players = _load_pool(hitters, pitchers, league_name, config_dir, config_file)
    print_player_values(players[:top], league)


@app.command()
def draft(
    log: Annotated[Path, typer.Argument(help="Text file with the pasted draft results")],
    hitters: _HittersArg,
    pitchers: _PitchersArg,
    league_name: _LeagueOpt = "roto5x5",
    config_dir: _ConfigDirOpt = Path("."),
    config_file: _ConfigFileOpt = "config.yaml",
    state_path: _StateOpt = None,
    team_name: Annotated[str | None, typer.Option("--team-name", help="Your manager name in the draft")] = None,
) -> None:
    """Parse a pasted draft log and update the draft state."""
    league, players = _load_pool(hitters, pitchers, league_name, config_dir, config_file)
    try:
        text = log.read_text()
        state = _load_state(state_path)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    tracker = DraftStateTracker(state, load_draft_settings(create_config(yaml_path=config_file)))
    if team_name:
        tracker.set_team_name(team_name)
    result = tracker.process_draft_log(text, players)

    print_draft_result(result, tracker.state)
    print_team_stats(team_stats(tracker.state.roster))
    if league.is_auction:
        inflation = compute_inflation(players, tracker.state, league)
        if inflation is not None:
            print_inflation(inflation)

    if state_path is not None and result.success:
        state_path.write_text(json.dumps(tracker.state.to_dict(), indent=2))
        console.print(f"State written to {state_path}")


@app.command()
def recommend(
    hitters: _HittersArg,
    pitchers: _PitchersArg,
    league_name: _LeagueOpt = "roto5x5",
    config_dir: _ConfigDirOpt = Path("."),
    config_file: _ConfigFileOpt = "config.yaml",
    state_path: _StateOpt = None,
    top: Annotated[int, typer.Option("--top", help="Number of recommendations")] = 5,
    best: Annotated[bool, typer.Option("--best", help="Rank by value alone, ignoring team needs")] = False,
) -> None:
    """Recommend the next pick for your team."""
    league, players = _load_pool(hitters, pitchers, league_name, config_dir, config_file)
    try:
        state = _load_state(state_path)
    except json.JSONDecodeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if best:
        ranked = best_available(players, state, league, limit=top)
    else:
        ranked = smart_recommendations(players, state, league, limit=top)
    print_recommendations(ranked, league)


@app.command()
def scarcity(
    hitters: _HittersArg,
    pitchers: _PitchersArg,
    league_name: _LeagueOpt = "roto5x5",
    config_dir: _ConfigDirOpt = Path("."),
    config_file: _ConfigFileOpt = "config.yaml",
    state_path: _StateOpt = None,
) -> None:
    """Show remaining players per position and value tier."""
    league, players = _load_pool(hitters, pitchers, league_name, config_dir, config_file)
    try:
        state = _load_state(state_path)
    except json.JSONDecodeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    tiers = load_scarcity_tiers(create_config(yaml_path=config_file), auction=league.is_auction)
    table = scarcity_table(players, state, scoring_type=league.scoring_type, auction=league.is_auction, tiers=tiers)
    print_scarcity(table, tiers, league.is_auction)
