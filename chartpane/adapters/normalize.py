from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from chartpane.errors import ChartDataError
from chartpane.series import SeriesData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    source_name: str | None = None,
) -> SeriesData:
    """Coerce caller input into float64 point arrays.

    Missing values (None, NaN) are kept as NaN so point positions survive; an
    empty ``y`` yields an empty series. Omitted ``x`` numbers points 1..N, the
    same positions an ordinal axis uses.
    """
    y_values = _resolve_column(y, key="y", data=data)
    if y_values is None:
        raise ChartDataError("y input is required")
    y_arr = _coerce_1d_numeric(y_values, label="y")

    if x is None:
        x_arr = np.arange(1, y_arr.size + 1, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(_resolve_column(x, key="x", data=data), label="x")

    if x_arr.shape != y_arr.shape:
        raise ChartDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return SeriesData(x=x_arr, y=y_arr, source_name=source_name)


def _resolve_column(value: Any, key: str, data: Any) -> Any:
    if data is None:
        if pd is not None and isinstance(value, pd.DataFrame):
            return _single_numeric_column(value, "1-D DataFrame input must contain exactly one numeric column")
        return value
    if pd is None:
        raise ChartDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise ChartDataError("`data` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in data.columns:
            raise ChartDataError(f"column not found: {value}")
        return data[value]
    if value is None and key == "y":
        return _single_numeric_column(data, "when y is omitted, data must have exactly one numeric column")
    return value


def _single_numeric_column(frame: Any, message: str) -> Any:
    numeric_cols = [c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])]
    if len(numeric_cols) != 1:
        raise ChartDataError(message)
    return frame[numeric_cols[0]]


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
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
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
        elif isinstance(raw, Decimal):
            out[i] = float(raw)
        else:
            try:
                out[i] = float(raw)
            except (TypeError, ValueError) as exc:
                raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
