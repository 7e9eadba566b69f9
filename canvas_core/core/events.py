from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


PRIMARY_BUTTON = 1


@dataclass(frozen=True)
class ViewEvent:
    """Normalized pointer payload handed to the composer gesture handlers."""

    x: float
    y: float
    buttons: int = 0
    modifiers: frozenset[str] = field(default_factory=frozenset)
    delta_y: float = 0.0

    @property
    def is_move(self) -> bool:
        return bool(self.buttons & PRIMARY_BUTTON)

    @property
    def is_control(self) -> bool:
        return "ctrl" in self.modifiers

    @property
    def is_zoom(self) -> bool:
        return "shift" in self.modifiers


_KEY_ALIASES = {
    "x": ("positionX", "x"),
    "y": ("positionY", "y"),
    "buttons": ("buttonsActive", "buttons"),
    "modifiers": ("modifierFlags", "modifiers"),
    "delta_y": ("deltaY", "delta_y"),
}


def parse_view_event(payload: object) -> ViewEvent | None:
    """Parse a UI pointer payload into a `ViewEvent`.

    Accepts either the long (`positionX`, `buttonsActive`, ...) or the short
    (`x`, `buttons`, ...) key set. Modifier flags may be a list of names or a
    mapping of name to bool. Payloads without a position yield `None`.
    """

    if not isinstance(payload, Mapping):
        return None
    x = _lookup(payload, "x")
    y = _lookup(payload, "y")
    if x is None or y is None:
        return None
    try:
        px = float(x)
        py = float(y)
        buttons = int(_lookup(payload, "buttons") or 0)
        delta_y = float(_lookup(payload, "delta_y") or 0.0)
    except (TypeError, ValueError):
        return None
    return ViewEvent(
        x=px,
        y=py,
        buttons=buttons,
        modifiers=_coerce_modifiers(_lookup(payload, "modifiers")),
        delta_y=delta_y,
    )


def _lookup(payload: Mapping, key: str) -> object:
    for alias in _KEY_ALIASES[key]:
        if alias in payload:
            return payload[alias]
    return None


def _coerce_modifiers(raw: object) -> frozenset[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, Mapping):
        return frozenset(_normalize_modifier(str(k)) for k, v in raw.items() if v)
    if isinstance(raw, (list, tuple, set, frozenset)):
        return frozenset(_normalize_modifier(str(k)) for k in raw)
    return frozenset()


def _normalize_modifier(name: str) -> str:
    lowered = name.strip().lower()
    if lowered.endswith("key"):
        lowered = lowered[:-3]
    if lowered in {"control", "ctl"}:
        return "ctrl"
    return lowered
