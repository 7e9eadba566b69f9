from __future__ import annotations

from dataclasses import dataclass, fields
import logging
from pathlib import Path
import tomllib

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposerSettings:
    """Tunable composer constants.

    The zoom guards are empirical UI-feel values: index zoom stops shrinking
    once the window is `index_guard_factor * index_count` wide, value zoom
    moves each bound by `1 / value_zoom_divisor` of the span per step.
    """

    index_count: int = 9
    value_count: int = 3
    padding: float = 0.0
    item_size: float = 0.5
    value_zoom_divisor: float = 100.0
    index_guard_factor: int = 2

    def __post_init__(self) -> None:
        if self.index_count <= 0:
            raise ValueError("index_count must be > 0")
        if self.value_count <= 0:
            raise ValueError("value_count must be > 0")
        if self.padding < 0:
            raise ValueError("padding must be >= 0")
        if self.item_size <= 0:
            raise ValueError("item_size must be > 0")
        if self.value_zoom_divisor <= 0:
            raise ValueError("value_zoom_divisor must be > 0")
        if self.index_guard_factor < 0:
            raise ValueError("index_guard_factor must be >= 0")


_INT_FIELDS = {"index_count", "value_count", "index_guard_factor"}


def load_settings(path: str | Path) -> ComposerSettings:
    """Read `ComposerSettings` from the `[composer]` table of a TOML file."""
    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"settings file not found: {settings_path}")
    with settings_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("composer", {})
    if not isinstance(table, dict):
        raise ValueError("`composer` must be a table")

    for section in raw:
        if section != "composer":
            LOGGER.warning("ignoring unknown settings section: %s", section)

    known = {f.name for f in fields(ComposerSettings)}
    values: dict[str, int | float] = {}
    for key, value in table.items():
        if key not in known:
            raise ValueError(f"unknown composer setting: {key}")
        values[key] = _coerce_number(value, key)
    return ComposerSettings(**values)


def _coerce_number(value: object, label: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"`{label}` must be a number")
    if label in _INT_FIELDS:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"`{label}` must be an integer")
        return int(value)
    return float(value)
