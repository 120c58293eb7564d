"""Resolve draft-board player names against the valued pool.

Draft interfaces abbreviate first names, append ``(Batter)``/``(Pitcher)`` to two-way
players and drop accents. Resolution tries a fixed sequence of rules and returns the
first hit; every rule is a plain function over pre-normalized candidates so each can be
exercised on its own.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from fantasy_draft_assistant.domain.player import PlayerKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

TWO_WAY_NAMES: tuple[str, ...] = ("Ohtani",)

_HITTER_HINTS = ("(Batter)", "Util")
_PITCHER_HINTS = ("(Pitcher)", "SP")

_ROLE_TAG = re.compile(r"\((Batter|Pitcher)\)", re.IGNORECASE)
_SUFFIX = re.compile(r"\b(jr|sr|ii|iii|iv)\.?\b")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


class NamedPlayer(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def team(self) -> str: ...

    @property
    def kind(self) -> PlayerKind: ...


def strip_accents(name: str) -> str:
    decomposed = unicodedata.normalize("NFD", name)
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def normalize_name(name: str) -> str:
    """Collapse a player name to a matching key.

    Lowercases, removes accents, drops Jr/Sr/II/III/IV suffixes and strips every
    character that is not a letter or digit.
    """
    normalized = strip_accents(name.lower())
    normalized = _SUFFIX.sub("", normalized)
    return _NON_ALNUM.sub("", normalized)


def clean_draft_name(name: str) -> str:
    """Remove the ``(Batter)``/``(Pitcher)`` tags draft boards add to two-way players."""
    return _ROLE_TAG.sub("", name).strip()


@dataclass(frozen=True)
class Candidate[P: NamedPlayer]:
    player: P
    normalized: str
    first: str
    last: str


def make_candidate[P: NamedPlayer](player: P) -> Candidate[P]:
    parts = player.name.split(" ")
    return Candidate(
        player=player,
        normalized=normalize_name(player.name),
        first=parts[0].lower(),
        last=normalize_name(parts[-1]),
    )


def _pick[P: NamedPlayer](matches: list[Candidate[P]], team: str | None) -> P | None:
    if not matches:
        return None
    if team:
        for candidate in matches:
            if candidate.player.team == team:
                return candidate.player
    return matches[0].player


def two_way_hint(name: str) -> PlayerKind | None:
    if any(hint in name for hint in _HITTER_HINTS):
        return PlayerKind.HITTER
    if any(hint in name for hint in _PITCHER_HINTS):
        return PlayerKind.PITCHER
    return None


def match_two_way[P: NamedPlayer](name: str, team: str | None, candidates: Sequence[Candidate[P]]) -> P | None:
    """Known two-way players carry a batter/pitcher hint; match only that kind."""
    for two_way in TWO_WAY_NAMES:
        if two_way not in name:
            continue
        target = two_way_hint(name)
        if target is None:
            return None
        for candidate in candidates:
            if two_way in candidate.player.name and candidate.player.kind is target:
                return candidate.player
    return None


def match_exact[P: NamedPlayer](name: str, team: str | None, candidates: Sequence[Candidate[P]]) -> P | None:
    key = normalize_name(clean_draft_name(name))
    if not key:
        return None
    return _pick([c for c in candidates if c.normalized == key], team)


def match_initial[P: NamedPlayer](name: str, team: str | None, candidates: Sequence[Candidate[P]]) -> P | None:
    """``D. Dingler`` matches ``Dillon Dingler``: same last name, first name starts with the initial."""
    if "." not in name:
        return None
    parts = clean_draft_name(name).split(".")
    if len(parts) < 2:
        return None
    initial = parts[0].strip().lower()
    last = normalize_name(parts[1])
    if not initial or not last:
        return None
    return _pick([c for c in candidates if c.last == last and c.first.startswith(initial)], team)


def match_containment[P: NamedPlayer](name: str, team: str | None, candidates: Sequence[Candidate[P]]) -> P | None:
    key = normalize_name(clean_draft_name(name))
    if not key:
        return None
    return _pick([c for c in candidates if c.normalized and (key in c.normalized or c.normalized in key)], team)


type ResolutionRule[P: NamedPlayer] = Callable[[str, str | None, Sequence[Candidate[P]]], P | None]

RESOLUTION_RULES: tuple[ResolutionRule, ...] = (  # type: ignore[type-arg]
    match_two_way,
    match_exact,
    match_initial,
    match_containment,
)


class PlayerResolver[P: NamedPlayer]:
    """Resolve-or-fail lookup of draft-board names in a player pool."""

    def __init__(self, players: Iterable[P]) -> None:
        self._candidates: list[Candidate[P]] = [make_candidate(p) for p in players]

    def resolve(self, name: str, team: str | None = None) -> P | None:
        for rule in RESOLUTION_RULES:
            match = rule(name, team, self._candidates)
            if match is not None:
                return match
        return None


def resolve_player[P: NamedPlayer](name: str, team: str | None, players: Iterable[P]) -> P | None:
    return PlayerResolver(players).resolve(name, team)
