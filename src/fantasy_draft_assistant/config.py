from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, cast

if TYPE_CHECKING:
    from collections.abc import Iterable

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from fantasy_draft_assistant.domain.draft import DEFAULT_TEAM_NAME
from fantasy_draft_assistant.draft.scarcity import AUCTION_TIERS, SNAKE_TIERS
from fantasy_draft_assistant.draft.tracker import DEFAULT_KNOWN_ALIASES, DraftSettings
from fantasy_draft_assistant.valuation.models import (
    DEFAULT_AUCTION_EXPONENT,
    DEFAULT_EFFICIENCY_FACTOR,
    ValuationTuning,
)


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


_DEFAULTS: dict[str, object] = {
    "valuation": {
        "auction_exponent": DEFAULT_AUCTION_EXPONENT,
        "efficiency_factor": DEFAULT_EFFICIENCY_FACTOR,
        "min_bid": 1,
    },
    "draft": {
        "default_team_name": DEFAULT_TEAM_NAME,
        "known_aliases": list(DEFAULT_KNOWN_ALIASES),
    },
    "scarcity": {
        "auction_tiers": list(AUCTION_TIERS),
        "snake_tiers": list(SNAKE_TIERS),
    },
}


def create_config(
    yaml_path: str = "config.yaml",
    env_prefix: str = "FDA",
    defaults: dict[str, object] | None = None,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    Environment variables use ``__`` as the nesting separator, e.g.
    ``FDA__VALUATION__AUCTION_EXPONENT=1.3``.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _as_list(value: object) -> list[str]:
    # Env vars arrive as a single comma-separated string.
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(v) for v in cast("Iterable[object]", value)]


def load_valuation_tuning(cfg: AppConfig | None = None) -> ValuationTuning:
    if cfg is None:
        cfg = create_config()
    return ValuationTuning(
        auction_exponent=float(str(cfg["valuation.auction_exponent"])),
        efficiency_factor=float(str(cfg["valuation.efficiency_factor"])),
        min_bid=int(str(cfg["valuation.min_bid"])),
    )


def load_draft_settings(cfg: AppConfig | None = None) -> DraftSettings:
    if cfg is None:
        cfg = create_config()
    return DraftSettings(
        default_team_name=str(cfg["draft.default_team_name"]),
        known_aliases=tuple(_as_list(cfg["draft.known_aliases"])),
    )


def load_scarcity_tiers(cfg: AppConfig | None = None, *, auction: bool) -> tuple[float, ...]:
    if cfg is None:
        cfg = create_config()
    key = "scarcity.auction_tiers" if auction else "scarcity.snake_tiers"
    return tuple(float(v) for v in _as_list(cfg[key]))
