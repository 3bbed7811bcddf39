"""
Unit tests for the 3' / 5' hairpin scans.
"""

import pytest

from hairpin_check import (FIVE_PRIME, THREE_PRIME, check_hairpin,
                           check_hairpin_3prime, check_hairpin_5prime)

# GGGG ... 5 nt loop ... CCCC at the 3' end, behind an 8 nt pad
HAIRPIN_3P = "ACACACAC" + "GGGG" + "TTTTT" + "CCCC"


def test_3prime_hairpin_found_in_window():
    hp = check_hairpin_3prime(HAIRPIN_3P)
    assert hp is not None
    assert hp.end == THREE_PRIME
    assert hp.stem_len == 4
    assert hp.loop_len == 5
    assert hp.stem_seq == "CCCC"
    assert hp.stem_rc == "GGGG"
    # positions index the full 21 nt primer, not the 15 nt window
    assert (hp.terminal_start, hp.terminal_end) == (17, 21)
    assert (hp.partner_start, hp.partner_end) == (8, 12)
    assert HAIRPIN_3P[hp.partner_start:hp.partner_end] == hp.stem_rc
    assert HAIRPIN_3P[hp.terminal_start:hp.terminal_end] == hp.stem_seq


def test_3prime_short_primer_scans_whole_sequence():
    hp = check_hairpin_3prime("GGGGTTTTTCCCC")
    assert hp is not None
    assert (hp.stem_len, hp.loop_len) == (4, 5)
    assert (hp.partner_start, hp.partner_end) == (0, 4)
    assert (hp.terminal_start, hp.terminal_end) == (9, 13)


def test_3prime_is_case_insensitive():
    assert check_hairpin_3prime(HAIRPIN_3P.lower()) == check_hairpin_3prime(HAIRPIN_3P)


def test_5prime_hairpin_found():
    seq = "CCCC" + "TTTTT" + "GGGG" + "A" * 10
    hp = check_hairpin_5prime(seq)
    assert hp is not None
    assert hp.end == FIVE_PRIME
    assert hp.stem_seq == "CCCC"
    assert (hp.stem_len, hp.loop_len) == (4, 5)
    assert (hp.terminal_start, hp.terminal_end) == (0, 4)
    assert (hp.partner_start, hp.partner_end) == (9, 13)


def test_no_hairpin():
    assert check_hairpin("A" * 20) == (None, None)
    assert check_hairpin("A" * 19 + "C") == (None, None)


def test_stem_outside_window_is_not_detected():
    seq = "GGGGGG" + "A" * 20 + "CCCCCC"
    assert check_hairpin_3prime(seq) is None
    assert check_hairpin_5prime(seq) is None

    # the same stem is there when the whole primer is scanned with a long loop
    hp = check_hairpin_3prime(seq, max_loop=20, window=len(seq))
    assert hp is not None
    assert (hp.stem_len, hp.loop_len) == (6, 20)
    assert (hp.partner_start, hp.partner_end) == (0, 6)


def test_longest_stem_wins():
    # a 6 bp stem exists, so the 2 bp match further in is never reported
    seq = "GAATTC" + "TTT" + "GAATTC"
    hp = check_hairpin_3prime(seq)
    assert hp.stem_len == 6
    assert hp.loop_len == 3


def test_5prime_longest_stem_wins():
    hp = check_hairpin_5prime("GAATTC" + "TTT" + "GAATTC")
    assert (hp.stem_len, hp.loop_len) == (6, 3)
    assert (hp.partner_start, hp.partner_end) == (9, 15)


def test_5prime_shortest_loop_wins():
    # GC pairs with the GC 3 nt downstream and again 6 nt downstream
    hp = check_hairpin_5prime("GCAAAGCAGC")
    assert (hp.stem_seq, hp.stem_len, hp.loop_len) == ("GC", 2, 3)
    assert (hp.partner_start, hp.partner_end) == (5, 7)


@pytest.mark.parametrize("kwargs", [dict(min_stem=0), dict(max_stem=1, min_stem=2), dict(window=0)])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        check_hairpin_3prime(HAIRPIN_3P, **kwargs)
    with pytest.raises(ValueError):
        check_hairpin_5prime(HAIRPIN_3P, **kwargs)
