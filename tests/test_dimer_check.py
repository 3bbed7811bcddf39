"""
Unit tests for 3' end primer-dimer detection.
"""

import pytest

from dimer_check import DimerRecord, check_all_dimers, check_dimer_pair
from lamp_primer_analyzer import Primer

P1 = "TTTTTTTTACGTAC"   # 3' end ACGTAC
P2 = "CCCCGTACGTCCCC"   # carries GTACGT at position 4


def test_single_direction_dimer():
    records = check_dimer_pair("P1", P1, "P2", P2)
    assert records == [DimerRecord("P1", "P2", "ACGTAC", "GTACGT", 4, 6)]


def test_both_directions_are_kept():
    records = check_dimer_pair("A", "CCCCCAAAAA", "B", "GGGGGTTTTT")
    assert [(r.primer_a, r.primer_b, r.match_length, r.binding_pos) for r in records] == [
        ("A", "B", 5, 5),
        ("B", "A", 5, 5),
    ]


def test_no_dimer():
    assert check_dimer_pair("A", "AAAAAAAA", "C", "CCCCCCCC") == []


def test_min_match_respected():
    assert check_dimer_pair("P1", P1, "P2", P2, min_match=7) == []


def test_short_primer_only_uses_feasible_lengths():
    records = check_dimer_pair("S", "GTAC", "X", "AAGTACAA")
    assert len(records) == 1
    assert records[0].primer_a == "S"
    assert records[0].tail == "GTAC"
    assert records[0].match_length == 4


def test_invalid_match_range():
    with pytest.raises(ValueError):
        check_dimer_pair("A", "ACGT", "B", "ACGT", min_match=0)


def test_check_all_pairs_in_input_order():
    primers = [Primer("P1", P1), Primer("P2", P2), Primer("N", "G" * 10)]
    records = check_all_dimers(primers)
    assert [(r.primer_a, r.primer_b, r.match_length) for r in records] == [
        ("P1", "P2", 6),
        ("P2", "N", 4),
        ("N", "P2", 4),
    ]
