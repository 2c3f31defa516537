"""Tests for GameMap / MapGroup models and the Catalog arena."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from map_picker.models.catalog import Catalog, GameMap, MapGroup
from map_picker.taxonomy.mode_taxonomy import Mode


def _map(map_id: int = 1, group_id: int = 1, **overrides) -> GameMap:
    fields = dict(
        map_id=map_id, nickname="Harbor", mode=Mode.TD, players=16, group_id=group_id,
    )
    fields.update(overrides)
    return GameMap(**fields)


class TestGameMap:
    def test_defaults(self):
        m = _map()
        assert m.is_gag is False
        assert m.disabled is False

    def test_frozen(self):
        m = _map()
        with pytest.raises(ValidationError):
            m.players = 8

    def test_equality_by_id(self):
        assert _map(1, nickname="A") == _map(1, nickname="B", mode=Mode.DM)
        assert _map(1) != _map(2)

    def test_hash_by_id(self):
        assert len({_map(1, nickname="A"), _map(1, nickname="B")}) == 1

    def test_mode_accepts_lowercase_string(self):
        assert _map(mode="captain").mode is Mode.CAPTAIN

    def test_map_info(self):
        assert _map(players=12).map_info == "Harbor TD (12)"

    @pytest.mark.parametrize("field", ["map_id", "players", "group_id"])
    def test_u16_fields_reject_out_of_range(self, field):
        with pytest.raises(ValidationError, match=field):
            _map(**{field: 70_000})
        with pytest.raises(ValidationError):
            _map(**{field: -1})

    def test_empty_nickname_rejected(self):
        with pytest.raises(ValidationError):
            _map(nickname="")


class TestMapGroup:
    def test_equality_by_group_id(self):
        a = MapGroup(group_id=3, base_name="Canyon", map_ids=(1,))
        b = MapGroup(group_id=3, base_name="Other", map_ids=(2, 3))
        assert a == b

    def test_needs_members(self):
        with pytest.raises(ValidationError):
            MapGroup(group_id=1, base_name="Empty", map_ids=())

    def test_base_name_required(self):
        with pytest.raises(ValidationError):
            MapGroup(group_id=1, base_name="", map_ids=(1,))


class TestCatalog:
    def test_lookup(self, sample_catalog: Catalog):
        m = sample_catalog.get_map(5)
        assert m is not None
        assert m.mode is Mode.DM
        assert sample_catalog.group_of(m).base_name == "Foundry"
        assert sample_catalog.get_map(999) is None
        assert sample_catalog.get_group(999) is None

    def test_order_is_file_order(self, sample_catalog: Catalog):
        ids = [m.map_id for m in sample_catalog.all_maps()]
        assert ids[:4] == [1, 2, 3, 4]
        assert [g.group_id for g in sample_catalog.all_groups()] == list(range(1, 9))

    def test_len_and_contains(self, sample_catalog: Catalog):
        assert len(sample_catalog) == 24
        assert 21 in sample_catalog
        assert 12 not in sample_catalog

    def test_maps_in_group(self, sample_catalog: Catalog):
        members = sample_catalog.maps_in_group(8)
        assert [m.map_id for m in members] == [22, 23, 24, 25]

    def test_map_with_unknown_group_rejected(self):
        with pytest.raises(ValueError, match="unknown group"):
            Catalog([MapGroup(group_id=1, base_name="A", map_ids=(1,))],
                    [_map(1, group_id=1), _map(2, group_id=9)])

    def test_group_listing_foreign_map_rejected(self):
        groups = [
            MapGroup(group_id=1, base_name="A", map_ids=(1, 2)),
            MapGroup(group_id=2, base_name="B", map_ids=(2,)),
        ]
        with pytest.raises(ValueError):
            Catalog(groups, [_map(1, group_id=1), _map(2, group_id=2)])

    def test_duplicate_map_ids_rejected(self):
        with pytest.raises(ValueError, match="duplicate map ids"):
            Catalog([MapGroup(group_id=1, base_name="A", map_ids=(1,))],
                    [_map(1), _map(1)])
