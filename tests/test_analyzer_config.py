"""
Tests for AnalyzerSettings defaults, validation and environment overrides.
"""

import pytest

from analyzer_config import AnalyzerSettings


def test_defaults():
    s = AnalyzerSettings()
    assert (s.hairpin_max_stem, s.hairpin_min_stem, s.hairpin_max_loop, s.hairpin_window) == (6, 2, 12, 15)
    assert (s.split_right_min, s.split_right_max, s.split_left_min) == (15, 35, 10)
    assert (s.dimer_min_match, s.dimer_max_match) == (3, 8)
    assert not s.scan_unsplit_hairpins


def test_is_inner():
    s = AnalyzerSettings()
    assert s.is_inner("FIP")
    assert s.is_inner("bip")
    assert not s.is_inner("F3")


def test_is_forward_inner():
    s = AnalyzerSettings(inner_primer_names=("FIP", "BIP", "FIP2", "LFIP"))
    assert s.is_forward_inner("FIP")
    assert s.is_forward_inner("fip2")
    assert not s.is_forward_inner("BIP")
    assert not s.is_forward_inner("LFIP")


@pytest.mark.parametrize("kwargs", [
    dict(hairpin_min_stem=0),
    dict(hairpin_max_stem=1),
    dict(hairpin_max_loop=2),
    dict(hairpin_window=0),
    dict(split_right_min=20, split_right_max=10),
    dict(split_left_min=-30),
    dict(dimer_min_match=9),
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        AnalyzerSettings(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv("LAMP_DIMER_MIN_MATCH", "5")
    monkeypatch.setenv("LAMP_HAIRPIN_MAX_LOOP", "9")
    monkeypatch.setenv("LAMP_INNER_PRIMERS", "FIP, BIP ,LFIP")
    monkeypatch.setenv("LAMP_SCAN_UNSPLIT_HAIRPINS", "yes")
    s = AnalyzerSettings.from_env()
    assert s.dimer_min_match == 5
    assert s.hairpin_max_loop == 9
    assert s.inner_primer_names == ("FIP", "BIP", "LFIP")
    assert s.scan_unsplit_hairpins
    assert s.hairpin_max_stem == 6


def test_from_env_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("LAMP_HAIRPIN_WINDOW", "wide")
    with pytest.raises(ValueError, match="LAMP_HAIRPIN_WINDOW"):
        AnalyzerSettings.from_env()
