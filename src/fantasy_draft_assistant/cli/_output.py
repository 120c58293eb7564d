from rich.console import Console
from rich.table import Table

from fantasy_draft_assistant.domain.draft import DraftState
from fantasy_draft_assistant.domain.league_settings import LeagueConfig
from fantasy_draft_assistant.domain.valuation import ValuedPlayer
from fantasy_draft_assistant.draft.recommend import Recommendation
from fantasy_draft_assistant.draft.scarcity import ScarcityTable, tier_key
from fantasy_draft_assistant.draft.team import TeamStats
from fantasy_draft_assistant.draft.tracker import DraftLogResult
from fantasy_draft_assistant.valuation.inflation import InflationStats

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_RATE_CATEGORIES = frozenset({"avg", "ops", "era", "whip"})


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _value_cell(player: ValuedPlayer, league: LeagueConfig) -> str:
    if league.is_auction:
        return f"${player.dollar_value}"
    return f"{player.z_total:.1f}"


def print_player_values(players: list[ValuedPlayer], league: LeagueConfig) -> None:
    """Print the valued pool as a ranked leaderboard."""
    if not players:
        console.print("No players to value.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Rank", justify="right")
    table.add_column("Player")
    table.add_column("Team")
    table.add_column("Pos")
    table.add_column("Type")
    table.add_column("Value" if league.is_auction else "Z", justify="right")
    table.add_column("Z total", justify="right")
    for player in players:
        team = f"{player.team}*" if player.player.has_invalid_team else player.team
        table.add_row(
            str(player.overall_rank),
            player.name,
            team,
            player.player.position_string,
            player.kind.value,
            _value_cell(player, league),
            f"{player.z_total:.2f}",
        )
    console.print(table)


def print_draft_result(result: DraftLogResult, state: DraftState) -> None:
    if not result.success:
        console.print(f"[yellow]Nothing processed:[/yellow] {result.message}")
        return
    console.print(f"[bold green]Draft log processed[/bold green] for team [bold]'{state.team_name}'[/bold]")
    console.print(f"  Pick lines: {result.processed}")
    console.print(f"  Players taken: {result.count}")
    console.print(f"  On your roster: {len(state.roster)}")
    if result.unmatched:
        console.print(f"  [yellow]Unmatched ({len(result.unmatched)}):[/yellow] {', '.join(result.unmatched)}")


def print_team_stats(stats: TeamStats) -> None:
    if stats.count == 0:
        return
    console.print(
        f"[bold]Team totals[/bold] ({stats.hitters} hitters, {stats.pitchers} pitchers, ${stats.spent} spent)"
    )
    console.print(
        f"  R {stats.r:.0f}  HR {stats.hr:.0f}  RBI {stats.rbi:.0f}  SB {stats.sb:.0f}"
        f"  AVG {stats.avg:.3f}  OPS {stats.ops:.3f}"
    )
    console.print(
        f"  W {stats.w:.0f}  K {stats.k:.0f}  SV {stats.sv:.0f}  QS {stats.qs:.0f}"
        f"  ERA {stats.era:.2f}  WHIP {stats.whip:.2f}  IP {stats.ip:.0f}"
    )


def print_inflation(stats: InflationStats) -> None:
    console.print(
        f"[bold]Inflation[/bold] {stats.inflation_rate:.2f}x"
        f"  (${stats.money_remaining:.0f} left for ${stats.value_remaining:.0f} of value,"
        f" {stats.draft_progress:.0%} drafted)"
    )


def print_recommendations(recommendations: list[Recommendation], league: LeagueConfig) -> None:
    if not recommendations:
        console.print("No players available.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("Key stats")
    table.add_column("Value" if league.is_auction else "Z", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Tags")
    for i, rec in enumerate(recommendations, start=1):
        player = rec.player
        categories = league.categories_for(player.kind)[:3]
        stats = []
        for cat in categories:
            value = player.player.stats.get(cat, 0.0)
            stats.append(f"{cat.upper()} {value:.3f}" if cat in _RATE_CATEGORIES else f"{cat.upper()} {value:.0f}")
        tags = []
        if rec.is_need_fit:
            tags.append("[red bold]NEED[/red bold]")
        if rec.is_scarcity_pick:
            tags.append("[yellow bold]SCARCE[/yellow bold]")
        table.add_row(
            str(i),
            player.name,
            player.player.position_string,
            player.team,
            " | ".join(stats),
            _value_cell(player, league),
            f"{rec.score:.1f}",
            " ".join(tags),
        )
    console.print(table)


def _heat(count: int) -> str:
    if count <= 2:
        return f"[red]{count}[/red]"
    if count <= 5:
        return f"[yellow]{count}[/yellow]"
    return f"[green]{count}[/green]"


def print_scarcity(table_data: ScarcityTable, tiers: tuple[float, ...], auction: bool) -> None:
    """Print remaining player counts per position and tier, coloured by how thin they are."""
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Pos")
    for threshold in tiers:
        label = f"${threshold:g}+" if auction else f"{threshold:g}+"
        table.add_column(label, justify="right")
    for pos, counts in table_data.items():
        table.add_row(pos, *(_heat(counts[tier_key(i)]) for i in range(len(tiers))))
    console.print(table)
