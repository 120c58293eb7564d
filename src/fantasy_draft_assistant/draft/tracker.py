from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fantasy_draft_assistant.domain.draft import DEFAULT_TEAM_NAME, DraftPick, DraftState, RosterEntry
from fantasy_draft_assistant.draft.log_parser import parse_draft_log
from fantasy_draft_assistant.draft.resolver import PlayerResolver

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from fantasy_draft_assistant.domain.valuation import ValuedPlayer

logger = logging.getLogger(__name__)

DEFAULT_KNOWN_ALIASES: tuple[str, ...] = ("bluezhin", "Blues Explosion", "BlueZhin")


@dataclass(frozen=True)
class DraftSettings:
    default_team_name: str = DEFAULT_TEAM_NAME
    known_aliases: tuple[str, ...] = DEFAULT_KNOWN_ALIASES


@dataclass(frozen=True)
class DraftLogResult:
    """Outcome of a draft-log reparse.

    ``count`` is the number of distinct taken players after the reparse; ``processed``
    counts pick lines that matched a layout, resolved or not.
    """

    success: bool
    count: int = 0
    processed: int = 0
    unmatched: tuple[str, ...] = ()
    message: str | None = None


@dataclass(frozen=True)
class ExternalPick:
    """A pick reported by a league provider, keyed by the provider's player id."""

    player_key: str
    pick: int | None = None
    cost: int = 0
    is_mine: bool = False


@dataclass(frozen=True)
class SyncResult:
    processed: int
    total: int
    unmatched: tuple[str, ...] = ()


def _record_pick(
    state: DraftState,
    player: ValuedPlayer,
    *,
    is_mine: bool,
    pick: int | None = None,
    cost: int = 0,
) -> None:
    if not state.is_taken(player.key):
        entry = DraftPick(pick=pick, player=player, is_mine=is_mine, cost=cost)
        state.picks.append(entry)
        state.taken.add(player.key)
    if is_mine and not state.has_on_roster(player):
        state.roster.append(RosterEntry(player=player, cost=cost))


def _record_roster_only(state: DraftState, player: ValuedPlayer) -> None:
    # My-Team entries carry no pick number or cost, so they stay out of the pick log.
    state.taken.add(player.key)
    if not state.has_on_roster(player):
        state.roster.append(RosterEntry(player=player))


class DraftStateTracker:
    """Owns the ``DraftState`` and is the only code that mutates it.

    Two update paths exist: ``process_draft_log`` rebuilds the whole state from pasted
    text, ``apply_pick``/``sync_picks`` add picks one at a time. On either path a taken
    key is never logged twice.
    """

    def __init__(self, state: DraftState | None = None, settings: DraftSettings | None = None) -> None:
        self._settings = settings or DraftSettings()
        self._state = state or DraftState(team_name=self._settings.default_team_name)

    @property
    def state(self) -> DraftState:
        return self._state

    @property
    def settings(self) -> DraftSettings:
        return self._settings

    def set_team_name(self, team_name: str) -> None:
        self._state.team_name = team_name.strip() or self._settings.default_team_name

    def clear(self) -> None:
        """Forget every pick; the team name survives."""
        self._state = DraftState(team_name=self._state.team_name)

    def is_taken(self, player: ValuedPlayer) -> bool:
        return self._state.is_taken(player.key)

    def available(self, players: Iterable[ValuedPlayer]) -> list[ValuedPlayer]:
        return [p for p in players if not self._state.is_taken(p.key)]

    def process_draft_log(self, text: str, players: Sequence[ValuedPlayer]) -> DraftLogResult:
        """Replace the draft state with what the pasted text describes.

        The new state is built on the side and swapped in once complete, so a failure
        part-way leaves the previous state untouched.
        """
        if not text or not text.strip():
            return DraftLogResult(success=False, count=len(self._state.taken), message="Empty text")

        parsed = parse_draft_log(
            text,
            self._state.team_name,
            default_team_name=self._settings.default_team_name,
            known_aliases=self._settings.known_aliases,
        )
        resolver = PlayerResolver(players)
        state = DraftState(team_name=parsed.team_name)
        unmatched: list[str] = []

        for parsed_pick in parsed.picks:
            line = parsed_pick.line
            player = resolver.resolve(line.name, line.team)
            if player is None:
                unmatched.append(line.name)
                continue
            _record_pick(state, player, is_mine=parsed_pick.is_mine, pick=line.pick, cost=line.cost)

        if not state.roster:
            for roster_line in parsed.my_team:
                player = resolver.resolve(roster_line.name, roster_line.team)
                if player is None:
                    unmatched.append(roster_line.name)
                    continue
                _record_roster_only(state, player)

        self._state = state
        logger.info(
            "Draft log processed: %d picks, %d taken, %d on roster, %d unmatched",
            len(parsed.picks),
            len(state.taken),
            len(state.roster),
            len(unmatched),
        )
        return DraftLogResult(
            success=True,
            count=len(state.taken),
            processed=len(parsed.picks),
            unmatched=tuple(unmatched),
        )

    def apply_pick(
        self,
        player: ValuedPlayer,
        *,
        is_mine: bool = False,
        pick: int | None = None,
        cost: int = 0,
    ) -> None:
        _record_pick(self._state, player, is_mine=is_mine, pick=pick, cost=cost)

    def sync_picks(
        self,
        picks: Iterable[ExternalPick],
        players: Iterable[ValuedPlayer],
        team_name: str | None = None,
    ) -> SyncResult:
        """Rebuild the state from provider picks, matching players by external key."""
        by_external_key = {p.player.external_key: p for p in players if p.player.external_key}
        self.clear()
        if team_name:
            self.set_team_name(team_name)

        processed = 0
        total = 0
        unmatched: list[str] = []
        for external in picks:
            total += 1
            player = by_external_key.get(external.player_key)
            if player is None:
                unmatched.append(external.player_key)
                continue
            self.apply_pick(player, is_mine=external.is_mine, pick=external.pick, cost=external.cost)
            processed += 1

        logger.info("Synced %d of %d external picks", processed, total)
        return SyncResult(processed=processed, total=total, unmatched=tuple(unmatched))
