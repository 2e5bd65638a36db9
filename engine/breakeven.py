"""
Break-even detection — the first year the net-worth leader changes.

Year 1 only records the initial leader. From year 2 on, the previous year's
leader is compared to the current one; the first flip fixes the break-even year
and nothing after it is evaluated. Ties count as "buy", so this is not the
same as a sign change of (rent - buy) when either side is exactly equal.
"""

from __future__ import annotations

from typing import Iterable, Literal, Optional

from core.schema import YearlyProjection

Leader = Literal["rent", "buy"]


def leader(rent_net_worth: float, buy_net_worth: float) -> Leader:
    return "rent" if rent_net_worth > buy_net_worth else "buy"


class BreakEvenDetector:
    """Feed one (year, rent, buy) observation per simulated year, in order."""

    def __init__(self):
        self.break_even_year: Optional[int] = None
        self._previous: Optional[Leader] = None

    def observe(self, year: int, rent_net_worth: float, buy_net_worth: float) -> Optional[int]:
        current = leader(rent_net_worth, buy_net_worth)
        if self.break_even_year is None and self._previous is not None and current != self._previous:
            self.break_even_year = year
        self._previous = current
        return self.break_even_year


def find_break_even_year(projections: Iterable[YearlyProjection]) -> Optional[int]:
    """Re-derive the break-even year from finished yearly rows."""
    detector = BreakEvenDetector()
    for row in projections:
        if detector.observe(row.year, row.rent_net_worth, row.buy_net_worth) is not None:
            break
    return detector.break_even_year
