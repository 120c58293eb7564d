"""Player projection records.

A ``PlayerProjection`` is the input unit of every valuation pass: identity, a flat
mapping of seasonal stat fields and the positions the player is eligible for.
Projections are frozen; valuation produces annotated copies (see
``fantasy_draft_assistant.domain.valuation.ValuedPlayer``) instead of mutating them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

UNKNOWN_TEAM = "UNKNOWN"


class PlayerKind(StrEnum):
    HITTER = "hitter"
    PITCHER = "pitcher"
    TWO_WAY = "two_way"


def player_key(name: str, team: str, kind: PlayerKind | str) -> str:
    """Unique draft key for a player: ``name|team|kind``."""
    return f"{name}|{team}|{PlayerKind(kind).value}"


@dataclass(frozen=True)
class PlayerProjection:
    """Seasonal projection for a single player.

    Attributes:
        name: Display name as supplied by the projection source.
        team: Team code, or ``UNKNOWN`` when the source code was not recognised.
        kind: Hitter, pitcher or two-way record.
        stats: Numeric stat fields keyed by lowercase stat name (``hr``, ``ip``, ``k9``...).
        positions: Eligible roster positions.
        injury_status: Injury tag such as ``IL10`` or ``DTD``.
        has_invalid_team: True when ``team`` was replaced by ``UNKNOWN``.
        team_original: Team value before it was replaced.
        external_key: Identifier used by an external league provider, for live sync.
    """

    name: str
    team: str
    kind: PlayerKind
    stats: Mapping[str, float] = field(default_factory=dict)
    positions: tuple[str, ...] = ()
    injury_status: str | None = None
    has_invalid_team: bool = False
    team_original: str | None = None
    external_key: str | None = None

    @property
    def key(self) -> str:
        return player_key(self.name, self.team, self.kind)

    @property
    def is_pitcher(self) -> bool:
        return self.kind is PlayerKind.PITCHER

    @property
    def is_starter(self) -> bool:
        return "SP" in self.positions

    @property
    def is_reliever(self) -> bool:
        return "RP" in self.positions

    @property
    def position_string(self) -> str:
        return ",".join(self.positions)
