from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fantasy_draft_assistant.domain.valuation import (
    ValuedPlayer,
    valued_player_from_record,
    valued_player_to_record,
)

DEFAULT_TEAM_NAME = "bluezhin"


@dataclass(frozen=True)
class DraftPick:
    pick: int | None
    player: ValuedPlayer
    is_mine: bool
    cost: int = 0


@dataclass(frozen=True)
class RosterEntry:
    player: ValuedPlayer
    cost: int = 0


@dataclass
class DraftState:
    """Everything known about the draft in progress.

    Only ``DraftStateTracker`` mutates a ``DraftState``; valuation, scarcity and
    recommendation code treat it as read-only.
    """

    team_name: str = DEFAULT_TEAM_NAME
    taken: set[str] = field(default_factory=set)
    picks: list[DraftPick] = field(default_factory=list)
    roster: list[RosterEntry] = field(default_factory=list)

    def is_taken(self, key: str) -> bool:
        return key in self.taken

    def has_on_roster(self, player: ValuedPlayer) -> bool:
        return any(entry.player.key == player.key for entry in self.roster)

    def to_dict(self) -> dict[str, Any]:
        return {
            "team_name": self.team_name,
            "taken_players": sorted(self.taken),
            "draft_log": [
                {
                    "pick": p.pick,
                    "player": valued_player_to_record(p.player),
                    "is_mine": p.is_mine,
                    "cost": p.cost,
                }
                for p in self.picks
            ],
            "roster": [{**valued_player_to_record(e.player), "cost": e.cost} for e in self.roster],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DraftState:
        picks = [
            DraftPick(
                pick=raw.get("pick"),
                player=valued_player_from_record(raw["player"]),
                is_mine=bool(raw.get("is_mine", False)),
                cost=int(raw.get("cost", 0)),
            )
            for raw in data.get("draft_log", [])
        ]
        roster = [
            RosterEntry(player=valued_player_from_record(raw), cost=int(raw.get("cost", 0)))
            for raw in data.get("roster", [])
        ]
        return cls(
            team_name=str(data.get("team_name") or DEFAULT_TEAM_NAME),
            taken=set(data.get("taken_players", [])),
            picks=picks,
            roster=roster,
        )
