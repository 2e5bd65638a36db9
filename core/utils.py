from __future__ import annotations

import logging
import math
from typing import Iterable, Union

import pandas as pd


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def round_half_up(x: float, decimals: int = 2) -> float:
    """Round to `decimals` places, ties toward +infinity (floor(x*m + 0.5)/m)."""
    m = 10 ** decimals
    return math.floor(x * m + 0.5) / m


def pct(rate: float) -> float:
    """Percentage field -> fraction (7.0 -> 0.07)."""
    return rate / 100


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Basic root handler; repeated calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    root.setLevel(level)
