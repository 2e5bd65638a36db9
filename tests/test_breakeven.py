from dataclasses import replace

from engine.breakeven import BreakEvenDetector, find_break_even_year, leader


def test_leader_ties_go_to_buy():
    assert leader(100, 100) == "buy"
    assert leader(101, 100) == "rent"


def test_first_year_never_breaks_even():
    detector = BreakEvenDetector()
    assert detector.observe(1, 100, 50) is None


def test_first_flip_is_kept():
    detector = BreakEvenDetector()
    detector.observe(1, 100, 50)
    assert detector.observe(2, 100, 150) == 2
    assert detector.observe(3, 200, 150) == 2


def test_ties_do_not_flip_a_buy_lead():
    detector = BreakEvenDetector()
    detector.observe(1, 50, 100)
    assert detector.observe(2, 100, 100) is None


def test_find_break_even_year(base_results):
    rows = [
        replace(r, rent_net_worth=1000.0, buy_net_worth=500.0 if r.year < 4 else 2000.0)
        for r in base_results.yearly_projections
    ]
    assert find_break_even_year(rows) == 4


def test_find_break_even_year_none_when_no_flip(base_results):
    rows = [replace(r, rent_net_worth=0.0, buy_net_worth=1.0) for r in base_results.yearly_projections]
    assert find_break_even_year(rows) is None


def test_find_break_even_year_empty():
    assert find_break_even_year([]) is None
