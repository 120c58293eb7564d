"""Projected totals for the user's drafted roster."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fantasy_draft_assistant.domain.player import PlayerKind

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fantasy_draft_assistant.domain.draft import RosterEntry
    from fantasy_draft_assistant.domain.league_settings import LeagueConfig

# Stand-ins for rate components a projection leaves out.
_AB_PER_PA = 0.9
_DEFAULT_AB = 500.0
_DEFAULT_AVG = 0.250
_DEFAULT_OPS = 0.750
_DEFAULT_ERA = 4.00
_DEFAULT_BB9 = 3.00
_DEFAULT_WHIP = 1.30


@dataclass(frozen=True)
class TeamStats:
    count: int = 0
    spent: int = 0
    hitters: int = 0
    pitchers: int = 0
    r: float = 0.0
    hr: float = 0.0
    rbi: float = 0.0
    sb: float = 0.0
    avg: float = 0.0
    ops: float = 0.0
    ab: float = 0.0
    h: float = 0.0
    w: float = 0.0
    k: float = 0.0
    sv: float = 0.0
    qs: float = 0.0
    nsvh: float = 0.0
    era: float = 0.0
    whip: float = 0.0
    ip: float = 0.0
    er: float = 0.0
    bb_allowed: float = 0.0
    h_allowed: float = 0.0


def _get(stats: Mapping[str, float], key: str) -> float:
    return stats.get(key) or 0.0


def team_stats(roster: Sequence[RosterEntry]) -> TeamStats:
    """Sum counting stats and rebuild AVG/OPS/ERA/WHIP from their components.

    AVG and OPS are weighted by at-bats; ERA and WHIP by innings. Missing components are
    estimated from the player's rate stats or league-typical defaults.
    """
    totals: dict[str, float] = dict.fromkeys(
        ("r", "hr", "rbi", "sb", "ab", "h", "ops_ab", "w", "k", "sv", "qs", "nsvh", "ip", "er", "bb", "hits"),
        0.0,
    )
    hitters = 0
    pitchers = 0
    spent = 0

    for entry in roster:
        stats = entry.player.player.stats
        spent += entry.cost
        if entry.player.kind is PlayerKind.PITCHER:
            pitchers += 1
            totals["w"] += _get(stats, "w")
            totals["k"] += _get(stats, "so") or _get(stats, "k")
            totals["sv"] += _get(stats, "sv")
            totals["qs"] += _get(stats, "qs")
            totals["nsvh"] += _get(stats, "sv") + _get(stats, "hld")

            ip = _get(stats, "ip")
            er = _get(stats, "er") or ip * (_get(stats, "era") or _DEFAULT_ERA) / 9
            walks = _get(stats, "bb") or ip * (_get(stats, "bb9") or _DEFAULT_BB9) / 9
            hits = _get(stats, "h") or ip * (_get(stats, "whip") or _DEFAULT_WHIP) - walks
            totals["ip"] += ip
            totals["er"] += er
            totals["bb"] += walks
            totals["hits"] += hits
        else:
            hitters += 1
            for cat in ("r", "hr", "rbi", "sb"):
                totals[cat] += _get(stats, cat)
            pa = _get(stats, "pa")
            ab = _get(stats, "ab") or (pa * _AB_PER_PA if pa else _DEFAULT_AB)
            h = _get(stats, "h") or ab * (_get(stats, "avg") or _DEFAULT_AVG)
            totals["ab"] += ab
            totals["h"] += h
            totals["ops_ab"] += (_get(stats, "ops") or _DEFAULT_OPS) * ab

    ab_total = totals["ab"]
    ip_total = totals["ip"]
    return TeamStats(
        count=len(roster),
        spent=spent,
        hitters=hitters,
        pitchers=pitchers,
        r=totals["r"],
        hr=totals["hr"],
        rbi=totals["rbi"],
        sb=totals["sb"],
        avg=totals["h"] / ab_total if ab_total > 0 else 0.0,
        ops=totals["ops_ab"] / ab_total if ab_total > 0 else 0.0,
        ab=ab_total,
        h=totals["h"],
        w=totals["w"],
        k=totals["k"],
        sv=totals["sv"],
        qs=totals["qs"],
        nsvh=totals["nsvh"],
        era=totals["er"] * 9 / ip_total if ip_total > 0 else 0.0,
        whip=(totals["hits"] + totals["bb"]) / ip_total if ip_total > 0 else 0.0,
        ip=ip_total,
        er=totals["er"],
        bb_allowed=totals["bb"],
        h_allowed=totals["hits"],
    )


def category_balance(roster: Sequence[RosterEntry], league: LeagueConfig) -> dict[str, float]:
    """Team z-score total per league category, hitting categories first."""
    categories = (*league.hitting_categories, *league.pitching_categories)
    balance = dict.fromkeys(categories, 0.0)
    for entry in roster:
        for cat in categories:
            balance[cat] += entry.player.z(cat)
    return balance
