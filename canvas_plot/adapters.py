from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Callable

import numpy as np
import torch

from canvas_core.core.errors import ChartDataError
from canvas_core.engines.base import ShapeStyle
from canvas_plot.shapes import AreaShape, BarShape, DotShape, GroupShape, LineShape


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


SHAPE_KINDS: dict[str, Callable[..., Any]] = {
    "line": LineShape,
    "bar": BarShape,
    "dot": DotShape,
    "area": AreaShape,
}


def series_to_shapes(
    values: Any = None,
    *,
    kind: str = "line",
    data: Any = None,
    style: ShapeStyle | None = None,
) -> list[Any]:
    """Turn a 1-D series into one item per index; non-finite samples become empty items."""
    factory = SHAPE_KINDS.get(kind)
    if factory is None:
        raise ChartDataError(f"unsupported shape kind: {kind}")
    resolved = _resolve_input(values, data=data)
    if resolved is None:
        raise ChartDataError("values input is required")
    arr = _coerce_1d_numeric(resolved, label="values")
    if arr.size == 0:
        raise ChartDataError("empty series")
    kwargs = {} if style is None else {"style": style}
    return [factory(y=float(v) if np.isfinite(v) else None, **kwargs) for v in arr.tolist()]


def group_series(
    columns: Mapping[str, Any],
    *,
    kinds: Mapping[str, str] | None = None,
    styles: Mapping[str, ShapeStyle] | None = None,
) -> list[GroupShape]:
    """Zip equally long named series into one `GroupShape` per index."""
    if not columns:
        raise ChartDataError("at least one series is required")
    kinds = kinds or {}
    styles = styles or {}
    per_name = {
        name: series_to_shapes(values, kind=kinds.get(name, "line"), style=styles.get(name))
        for name, values in columns.items()
    }
    lengths = {len(shapes) for shapes in per_name.values()}
    if len(lengths) != 1:
        raise ChartDataError(f"series length mismatch: {sorted(lengths)}")
    size = lengths.pop()
    return [GroupShape(groups={name: shapes[i] for name, shapes in per_name.items()}) for i in range(size)]


def _resolve_input(values: Any, *, data: Any) -> Any:
    if data is None:
        return values
    if pd is None:
        raise ChartDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise ChartDataError("`data` must be a pandas DataFrame")
    if isinstance(values, str):
        if values not in data.columns:
            raise ChartDataError(f"column not found: {values}")
        return data[values]
    if values is None:
        numeric = [c for c in data.columns if pd.api.types.is_numeric_dtype(data[c])]
        if len(numeric) != 1:
            raise ChartDataError("when values is omitted, data must have exactly one numeric column")
        return data[numeric[0]]
    return values


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return tensor.cpu().to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
