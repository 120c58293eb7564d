from dataclasses import dataclass, field
from enum import StrEnum

from fantasy_draft_assistant.domain.player import PlayerKind


class DraftMode(StrEnum):
    SNAKE = "snake"
    AUCTION = "auction"


class ScoringType(StrEnum):
    ROTO = "roto"
    HEAD = "head"


DEFAULT_INVERTED: frozenset[str] = frozenset({"era", "whip"})

DEFAULT_ROSTER_COMPOSITION: tuple[str, ...] = (
    "C", "1B", "2B", "3B", "SS", "CI", "MI", "LF", "CF", "RF", "OF", "Util",
    "SP", "SP", "SP", "RP", "RP", "P", "P", "P",
    "BN", "BN", "BN", "BN", "BN", "BN",
    "IL", "IL", "IL", "NA",
)  # fmt: skip


@dataclass(frozen=True)
class LeagueConfig:
    name: str
    hitting_categories: tuple[str, ...]
    pitching_categories: tuple[str, ...]
    inverted_categories: frozenset[str] = DEFAULT_INVERTED
    roster_composition: tuple[str, ...] = DEFAULT_ROSTER_COMPOSITION
    teams: int = 12
    budget: int = 260
    draft_mode: DraftMode = DraftMode.SNAKE
    scoring_type: ScoringType = ScoringType.ROTO
    hitter_pitcher_split: tuple[int, int] = (60, 40)
    innings_limit: float = 1350.0
    roster_hitters: int = 12
    roster_pitchers: int = 8
    category_weights: dict[str, float] = field(default_factory=dict)

    @property
    def is_auction(self) -> bool:
        return self.draft_mode is DraftMode.AUCTION

    @property
    def bench_slots(self) -> int:
        return sum(1 for slot in self.roster_composition if slot == "BN")

    def categories_for(self, kind: PlayerKind) -> tuple[str, ...]:
        if kind is PlayerKind.PITCHER:
            return self.pitching_categories
        return self.hitting_categories

    def weight(self, category: str) -> float:
        return self.category_weights.get(category, 1.0)

    def is_inverted(self, category: str) -> bool:
        return category in self.inverted_categories


ROTO_5X5 = LeagueConfig(
    name="roto5x5",
    hitting_categories=("r", "hr", "rbi", "sb", "avg"),
    pitching_categories=("w", "sv", "k", "era", "whip"),
)

H2H_6X6 = LeagueConfig(
    name="h2h12",
    hitting_categories=("r", "hr", "rbi", "sb", "avg", "ops"),
    pitching_categories=("w", "k", "era", "whip", "qs", "nsvh"),
    scoring_type=ScoringType.HEAD,
)

LEAGUE_PRESETS: dict[str, LeagueConfig] = {
    ROTO_5X5.name: ROTO_5X5,
    H2H_6X6.name: H2H_6X6,
}
