"""Build ``PlayerProjection`` records from flat stat mappings.

The projection-ingestion layer hands over one mapping per player (``name``, ``team``,
``positions`` and numeric stat fields). This module validates the team code and fills
in the derived stats that valuation reads: OPS for hitters; strikeout aliases, per-nine
rates, WHIP, estimated quality starts and saves+holds for pitchers.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING, Any

from fantasy_draft_assistant.domain.player import UNKNOWN_TEAM, PlayerKind, PlayerProjection
from fantasy_draft_assistant.valuation.models import round_half_up

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

VALID_TEAMS: frozenset[str] = frozenset(
    {
        "ARI", "ATL", "BAL", "BOS", "CHC", "CIN", "CLE", "COL",
        "DET", "HOU", "LAA", "LAD", "MIA", "MIL", "MIN", "NYM",
        "NYY", "OAK", "PHI", "PIT", "SEA", "STL", "TEX", "TOR",
        "KCR", "KC",
        "SDP", "SD",
        "SFG", "SF",
        "TBR", "TB",
        "WSN", "WSH",
        "CHW", "CWS",
        "AZ", "ATH", "WAS",
    }
)  # fmt: skip

_IDENTITY_FIELDS: frozenset[str] = frozenset(
    {"name", "team", "type", "kind", "positions", "injury_status", "external_key"}
)

# (minimum IP per start, maximum ERA, share of starts that are quality starts)
_QS_RATE_TIERS: tuple[tuple[float, float, float], ...] = (
    (6.0, 3.00, 0.75),
    (5.5, 3.50, 0.60),
    (5.0, 4.00, 0.45),
    (4.5, 4.50, 0.30),
)
_QS_RATE_FLOOR = 0.15

_POSITION_SPLIT = re.compile(r"[,|/]")


def parse_positions(raw: object) -> tuple[str, ...]:
    """Accept a list or a ``,``/``|``/``/`` separated string of positions."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        parts: Iterable[object] = _POSITION_SPLIT.split(raw)
    else:
        parts = raw  # type: ignore[assignment]
    return tuple(dict.fromkeys(str(p).strip() for p in parts if str(p).strip()))


def _to_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return None if math.isnan(float(value)) else float(value)
    text = re.sub(r"[^\d.\-]", "", str(value))
    try:
        return float(text)
    except ValueError:
        return None


def validate_team(team: str | None) -> tuple[str, bool]:
    """Return ``(team_code, is_invalid)``, mapping unknown codes to ``UNKNOWN``."""
    if team and team.strip().upper() in VALID_TEAMS:
        return team.strip(), False
    return UNKNOWN_TEAM, True


def derive_hitter_stats(stats: dict[str, float]) -> dict[str, float]:
    out = dict(stats)
    if "obp" in out and "slg" in out:
        out["ops"] = round(out["obp"] + out["slg"], 3)
    return out


def estimate_quality_starts(gs: float, ip: float, era: float) -> float:
    ip_per_start = ip / gs
    rate = _QS_RATE_FLOOR
    for min_ip, max_era, tier_rate in _QS_RATE_TIERS:
        if ip_per_start >= min_ip and era <= max_era:
            rate = tier_rate
            break
    return float(round_half_up(gs * rate))


def derive_pitcher_stats(stats: dict[str, float]) -> dict[str, float]:
    out = dict(stats)
    ip = out.get("ip")

    if "so" in out:
        out["k"] = out["so"]
    elif "k9" in out and ip is not None:
        out["k"] = float(round_half_up(out["k9"] * ip / 9))
        out["so"] = out["k"]

    if "bb9" in out and "bb" not in out and ip is not None:
        out["bb"] = float(round_half_up(out["bb9"] * ip / 9))

    if ip is not None and ip > 0:
        if "k9" not in out and "so" in out:
            out["k9"] = round(out["so"] * 9 / ip, 2)
        if "bb9" not in out and "bb" in out:
            out["bb9"] = round(out["bb"] * 9 / ip, 2)
        if "hr9" not in out and "hr" in out:
            out["hr9"] = round(out["hr"] * 9 / ip, 2)
        if "whip" not in out and "h" in out and "bb" in out:
            out["whip"] = round((out["h"] + out["bb"]) / ip, 2)

    gs = out.get("gs")
    if "qs" not in out and gs and gs > 0 and "era" in out and ip is not None:
        out["qs"] = estimate_quality_starts(gs, ip, out["era"])

    if "sv" in out:
        hld = out.get("hld", 0.0)
        out["nsvh"] = out["sv"] + hld if hld > 0 else out["sv"]
        out.setdefault("hld", 0.0)
    return out


def build_player(record: Mapping[str, Any], kind: PlayerKind | str | None = None) -> PlayerProjection:
    """Create a projection from one flat record.

    ``kind`` overrides the record's own ``kind``/``type`` field. Non-numeric stat fields
    are dropped.
    """
    player_kind = PlayerKind(kind or record.get("kind") or record.get("type") or PlayerKind.HITTER)
    name = str(record.get("name", "")).strip()
    raw_team = record.get("team")
    team, invalid = validate_team(str(raw_team) if raw_team is not None else None)
    if invalid:
        logger.warning("Invalid team code for %s: %r, marking as %s", name, raw_team, UNKNOWN_TEAM)

    stats: dict[str, float] = {}
    for field_name, raw in record.items():
        if field_name in _IDENTITY_FIELDS:
            continue
        value = _to_float(raw)
        if value is not None:
            stats[str(field_name).lower()] = value

    if player_kind is PlayerKind.PITCHER:
        stats = derive_pitcher_stats(stats)
    else:
        stats = derive_hitter_stats(stats)

    injury = record.get("injury_status")
    external_key = record.get("external_key")
    return PlayerProjection(
        name=name,
        team=team,
        kind=player_kind,
        stats=stats,
        positions=parse_positions(record.get("positions")),
        injury_status=str(injury) if injury else None,
        has_invalid_team=invalid,
        team_original=str(raw_team) if invalid and raw_team is not None else None,
        external_key=str(external_key) if external_key else None,
    )


def build_players(records: Iterable[Mapping[str, Any]], kind: PlayerKind | str | None = None) -> list[PlayerProjection]:
    return [build_player(r, kind) for r in records]
