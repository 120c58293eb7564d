"""Parse draft results pasted from a live-draft page.

The pasted text mixes three pick layouts with roster sidebars and chat noise:

* auction results: ``12 Mike TroutLAA- OF Manager Name 3 $45``
* snake results:   ``217 Mike TroutLAA- OF Manager Name 18``
* sidebar updates: ``5th Mike TroutLAA - OF``

Each layout is a ``PickPattern``; lines are tried against the patterns in order and the
first match wins. Lines that match nothing are ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_TEAM = r"([A-Z]{2,3}|ATH|WAS|CWS|AZ)"

_MIN_LINE_LENGTH = 5
_SECTION_STOPS = ("My Queue", "My Team")
_MY_TEAM_SCAN_LINES = 40
_DETECT_SCAN_LINES = 25
_MY_TEAM_SKIP = frozenset({"Pos", "Player", "Salary"})

_ROSTER_ENTRY = re.compile(rf"\s+(.+?){_TEAM}\s+-\s+")
_DETECT_PICK = re.compile(rf"^(\d+)\s+(.+?){_TEAM}-\s+([A-Z,]+)\s+(.+?)\s+\d+\s+\$(\d+)")


class PickFormat(StrEnum):
    AUCTION = "auction"
    SNAKE_RESULT = "snake_result"
    SIDEBAR_UPDATE = "sidebar_update"


@dataclass(frozen=True)
class PickLine:
    format: PickFormat
    pick: int
    name: str
    team: str
    positions: str
    manager: str | None = None
    cost: int = 0


@dataclass(frozen=True)
class PickPattern:
    format: PickFormat
    regex: re.Pattern[str]
    manager_group: int | None = None
    cost_group: int | None = None

    def match(self, line: str) -> PickLine | None:
        m = self.regex.match(line)
        if m is None:
            return None
        manager = m.group(self.manager_group).strip() if self.manager_group is not None else None
        cost = int(m.group(self.cost_group)) if self.cost_group is not None else 0
        return PickLine(
            format=self.format,
            pick=int(m.group(1)),
            name=m.group(2).strip(),
            team=m.group(3),
            positions=m.group(4),
            manager=manager,
            cost=cost,
        )


PICK_PATTERNS: tuple[PickPattern, ...] = (
    PickPattern(
        format=PickFormat.AUCTION,
        regex=re.compile(rf"^(\d+)\s+(.+?){_TEAM}-\s+([A-Za-z0-9,]+)\s+(.+?)\s+\d+\s+\$(\d+)"),
        manager_group=5,
        cost_group=6,
    ),
    PickPattern(
        format=PickFormat.SNAKE_RESULT,
        regex=re.compile(rf"^(\d+)\s+(.+?){_TEAM}-\s+([A-Za-z0-9,]+)\s+(.+?)(?:\s+\d+)?$"),
        manager_group=5,
    ),
    PickPattern(
        format=PickFormat.SIDEBAR_UPDATE,
        regex=re.compile(rf"^(\d+)(?:st|nd|rd|th)\s*(.+?){_TEAM}\s+-\s+([A-Za-z0-9,]+)"),
    ),
)


def parse_pick_line(line: str, patterns: Sequence[PickPattern] = PICK_PATTERNS) -> PickLine | None:
    for pattern in patterns:
        parsed = pattern.match(line)
        if parsed is not None:
            return parsed
    return None


def is_manager(manager: str | None, team_name: str | None) -> bool:
    """True when ``manager`` is ``team_name`` or starts with it as a whole word.

    ``Team 1`` matches ``Team 1`` and ``Team 1 (you)`` but not ``Team 10``.
    """
    if not manager or not team_name:
        return False
    manager_lower = manager.lower().strip()
    name_lower = team_name.lower().strip()
    if manager_lower == name_lower:
        return True
    return re.match(rf"^{re.escape(name_lower)}(?:\s|$)", manager_lower, re.IGNORECASE) is not None


@dataclass(frozen=True)
class ParsedPick:
    line: PickLine
    is_mine: bool


@dataclass(frozen=True)
class RosterLine:
    name: str
    team: str


@dataclass(frozen=True)
class ParsedDraftLog:
    team_name: str
    picks: tuple[ParsedPick, ...]
    my_team: tuple[RosterLine, ...]


def _my_team_index(lines: Sequence[str]) -> int | None:
    for i, line in enumerate(lines):
        if "My Team" in line and "of" in line:
            return i
    return None


def parse_my_team_section(lines: Sequence[str]) -> list[RosterLine]:
    """Roster entries listed under the ``My Team … of …`` header."""
    start = _my_team_index(lines)
    if start is None:
        return []
    entries: list[RosterLine] = []
    for raw in lines[start + 1 : start + 1 + _MY_TEAM_SCAN_LINES]:
        line = raw.strip()
        if not line or line.startswith("Updates") or line in _MY_TEAM_SKIP:
            continue
        if "joined" in line:
            break
        m = _ROSTER_ENTRY.search(line)
        if m is not None:
            entries.append(RosterLine(name=m.group(1).strip(), team=m.group(2)))
    return entries


def detect_team_name(lines: Sequence[str], known_aliases: Sequence[str] = ()) -> str | None:
    """Guess the user's manager name from the pasted text.

    First cross-references last names on the My-Team roster with auction picks, then
    falls back to the known aliases.
    """
    start = _my_team_index(lines)
    if start is not None:
        my_players: list[str] = []
        for raw in lines[start + 1 : start + _DETECT_SCAN_LINES]:
            m = _ROSTER_ENTRY.search(raw.strip())
            if m is not None:
                my_players.append(m.group(1).strip())

        if my_players:
            last_names = [p.split(" ")[-1].lower() for p in my_players]
            for line in lines:
                m = _DETECT_PICK.match(line)
                if m is None:
                    continue
                raw_name = m.group(2).strip().lower()
                if any(last in raw_name for last in last_names):
                    return m.group(5).strip()

    aliases = {alias.lower() for alias in known_aliases}
    for line in lines:
        m = _DETECT_PICK.match(line)
        if m is not None and m.group(5).strip().lower() in aliases:
            return m.group(5).strip()
    return None


def parse_draft_log(
    text: str,
    team_name: str,
    *,
    default_team_name: str,
    known_aliases: Sequence[str] = (),
) -> ParsedDraftLog:
    """Split pasted draft text into picks attributed to the user or to others.

    Auto-detects the user's manager name only while ``team_name`` is empty or still the
    default. Stops reading picks at the My Queue / My Team sections.
    """
    lines = text.strip().split("\n")

    if not team_name or team_name == default_team_name:
        detected = detect_team_name(lines, known_aliases)
        if detected:
            logger.debug("Detected team name %r", detected)
            team_name = detected

    picks: list[ParsedPick] = []
    for raw in lines:
        line = raw.strip()
        if len(line) < _MIN_LINE_LENGTH:
            continue
        if line.startswith(_SECTION_STOPS):
            break
        parsed = parse_pick_line(line)
        if parsed is None:
            continue
        picks.append(ParsedPick(line=parsed, is_mine=is_manager(parsed.manager, team_name)))

    logger.debug("Parsed %d pick lines from %d lines of text", len(picks), len(lines))
    return ParsedDraftLog(team_name=team_name, picks=tuple(picks), my_team=tuple(parse_my_team_section(lines)))
