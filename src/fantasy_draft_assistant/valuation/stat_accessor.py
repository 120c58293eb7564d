"""Category lookups on projection records.

Some stats arrive under more than one field name depending on the projection source
(strikeouts as ``k`` or ``so``; net saves+holds missing from older exports). The alias
table lists the fields to try, in order, for each category.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fantasy_draft_assistant.domain.player import PlayerProjection

STAT_ALIASES: dict[str, tuple[str, ...]] = {
    "so": ("so", "k"),
    "k": ("k", "so"),
    "nsvh": ("nsvh", "sv"),
}


class StatAccessor:
    def __init__(self, aliases: Mapping[str, tuple[str, ...]] | None = None) -> None:
        self._aliases = dict(STAT_ALIASES if aliases is None else aliases)

    def fields_for(self, category: str) -> tuple[str, ...]:
        return self._aliases.get(category, (category,))

    def value(self, stats: Mapping[str, float], category: str) -> float | None:
        """Return the first present, numeric value for ``category`` or None."""
        for name in self.fields_for(category):
            if name in stats:
                raw = stats[name]
                if raw is None or (isinstance(raw, float) and math.isnan(raw)):
                    return None
                return float(raw)
        return None


DEFAULT_ACCESSOR = StatAccessor()


def get_stat(player: PlayerProjection, category: str) -> float | None:
    return DEFAULT_ACCESSOR.value(player.stats, category)
