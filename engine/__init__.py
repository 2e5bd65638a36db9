"""
Projection engine — mortgage math, yearly cash flows, break-even detection.
"""

from .breakeven import BreakEvenDetector, find_break_even_year, leader
from .cashflow import calculate_mortgage_payment
from .runner import calculate_rent_vs_buy

__all__ = [
    "BreakEvenDetector",
    "calculate_mortgage_payment",
    "calculate_rent_vs_buy",
    "find_break_even_year",
    "leader",
]
