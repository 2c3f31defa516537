"""Tests for mode taxonomy: parsing, rotation cycle, cross-mode discount table."""

from __future__ import annotations

import itertools

import pytest

from map_picker.taxonomy.mode_taxonomy import (
    MODE_ORDER,
    Mode,
    mode_discount,
    next_mode,
    parse_mode,
)


class TestModeEnum:
    def test_six_modes(self):
        assert len(Mode) == 6

    def test_canonical_order(self):
        assert MODE_ORDER == (
            Mode.TD, Mode.DM, Mode.CHASER, Mode.BR, Mode.CAPTAIN, Mode.SIEGE,
        )

    def test_str_is_display_name(self):
        assert str(Mode.CHASER) == "Chaser"
        assert f"{Mode.TD}" == "TD"

    @pytest.mark.parametrize("raw, expected", [
        ("td", Mode.TD),
        ("TD", Mode.TD),
        ("dm", Mode.DM),
        ("chaser", Mode.CHASER),
        ("CHASER", Mode.CHASER),
        ("Br", Mode.BR),
        ("captain", Mode.CAPTAIN),
        (" siege ", Mode.SIEGE),
    ])
    def test_case_insensitive_lookup(self, raw, expected):
        assert Mode(raw) is expected
        assert parse_mode(raw) is expected

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError, match="Unknown mode 'ctf'"):
            parse_mode("ctf")


class TestRotation:
    @pytest.mark.parametrize("mode, expected", [
        (Mode.TD, Mode.DM),
        (Mode.DM, Mode.CHASER),
        (Mode.CHASER, Mode.BR),
        (Mode.BR, Mode.CAPTAIN),
        (Mode.CAPTAIN, Mode.SIEGE),
        (Mode.SIEGE, Mode.TD),
    ])
    def test_successor(self, mode, expected):
        assert next_mode(mode) is expected

    def test_full_cycle_returns_to_start(self):
        mode = Mode.BR
        for _ in range(len(Mode)):
            mode = next_mode(mode)
        assert mode is Mode.BR


class TestModeDiscount:
    @pytest.mark.parametrize("a, b, expected", [
        (Mode.TD, Mode.DM, 0.6),
        (Mode.TD, Mode.BR, 0.5),
        (Mode.TD, Mode.CAPTAIN, 0.5),
        (Mode.DM, Mode.BR, 0.9),
        (Mode.DM, Mode.CAPTAIN, 0.8),
        (Mode.BR, Mode.CAPTAIN, 0.7),
        (Mode.TD, Mode.SIEGE, 0.1),
        (Mode.CAPTAIN, Mode.SIEGE, 0.1),
        (Mode.TD, Mode.CHASER, 0.1),
        (Mode.BR, Mode.CHASER, 0.1),
        (Mode.CHASER, Mode.SIEGE, 0.1),
    ])
    def test_table_values(self, a, b, expected):
        assert mode_discount(a, b) == pytest.approx(expected)

    def test_symmetric(self):
        for a, b in itertools.product(Mode, repeat=2):
            assert mode_discount(a, b) == mode_discount(b, a)

    def test_same_mode_is_one(self):
        for mode in Mode:
            assert mode_discount(mode, mode) == 1.0

    def test_all_values_in_unit_interval(self):
        for a, b in itertools.product(Mode, repeat=2):
            assert 0.0 < mode_discount(a, b) <= 1.0
