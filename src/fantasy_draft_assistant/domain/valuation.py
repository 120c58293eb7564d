from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fantasy_draft_assistant.domain.player import PlayerKind, PlayerProjection


@dataclass(frozen=True)
class ValuedPlayer:
    """A projection annotated with z-scores and (in auction leagues) a dollar value.

    ``category_z`` holds the finalized, unweighted per-category z-scores rounded to two
    decimals. ``z_total`` is the weighted sum of the same z-scores.
    """

    player: PlayerProjection
    category_z: dict[str, float] = field(default_factory=dict)
    z_total: float = 0.0
    z_avg: float = 0.0
    adjusted_points: float = 0.0
    dollar_value: int = 0
    value_rank: int = 0
    overall_rank: int = 0

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def team(self) -> str:
        return self.player.team

    @property
    def kind(self) -> PlayerKind:
        return self.player.kind

    @property
    def positions(self) -> tuple[str, ...]:
        return self.player.positions

    @property
    def key(self) -> str:
        return self.player.key

    def z(self, category: str) -> float:
        return self.category_z.get(category, 0.0)


@dataclass(frozen=True)
class CategoryBreakdown:
    category: str
    value: float | None
    z_score: float
    is_strength: bool
    is_weakness: bool


def valued_player_to_record(player: ValuedPlayer) -> dict[str, Any]:
    """Flatten a valued player into a JSON-compatible record."""
    proj = player.player
    record: dict[str, Any] = {
        "name": proj.name,
        "team": proj.team,
        "kind": proj.kind.value,
        "positions": list(proj.positions),
        "stats": dict(proj.stats),
        "injury_status": proj.injury_status,
        "has_invalid_team": proj.has_invalid_team,
        "team_original": proj.team_original,
        "external_key": proj.external_key,
        "category_z": dict(player.category_z),
        "z_total": player.z_total,
        "z_avg": player.z_avg,
        "adjusted_points": player.adjusted_points,
        "dollar_value": player.dollar_value,
        "value_rank": player.value_rank,
        "overall_rank": player.overall_rank,
    }
    return record


def valued_player_from_record(record: dict[str, Any]) -> ValuedPlayer:
    proj = PlayerProjection(
        name=str(record["name"]),
        team=str(record["team"]),
        kind=PlayerKind(record["kind"]),
        stats={str(k): float(v) for k, v in dict(record.get("stats", {})).items()},
        positions=tuple(record.get("positions", ())),
        injury_status=record.get("injury_status"),
        has_invalid_team=bool(record.get("has_invalid_team", False)),
        team_original=record.get("team_original"),
        external_key=record.get("external_key"),
    )
    return ValuedPlayer(
        player=proj,
        category_z={str(k): float(v) for k, v in dict(record.get("category_z", {})).items()},
        z_total=float(record.get("z_total", 0.0)),
        z_avg=float(record.get("z_avg", 0.0)),
        adjusted_points=float(record.get("adjusted_points", 0.0)),
        dollar_value=int(record.get("dollar_value", 0)),
        value_rank=int(record.get("value_rank", 0)),
        overall_rank=int(record.get("overall_rank", 0)),
    )
