"""
Map catalog models.

``GameMap`` is one playable map variant (a location in one mode with a
player capacity).  ``MapGroup`` clusters variants of the same location.
``Catalog`` is the arena that owns both: maps and groups refer to each other
by id only, and lookups go through the catalog.

All models are frozen; the catalog is loaded once at startup and never
mutated afterwards.
"""

from __future__ import annotations

from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from map_picker.taxonomy.mode_taxonomy import Mode

U16_MAX = 65_535


def _check_u16(name: str, v: int) -> int:
    if not 0 <= v <= U16_MAX:
        raise ValueError(f"{name} must be in [0, {U16_MAX}], got {v}.")
    return v


class GameMap(BaseModel):
    """A single playable map variant.

    Two maps are equal iff their ``map_id`` is equal.

    Attributes:
        map_id: Stable catalog id (also what the play log records).
        nickname: Display name; defaults to the group base name in the catalog file.
        mode: Game mode this variant is played in.
        players: Minimum supported player count (capacity).
        group_id: Id of the owning ``MapGroup``.
        is_gag: Joke map; kept in the catalog, flagged for display.
        disabled: Map marked as disabled in the catalog file.
    """

    model_config = ConfigDict(frozen=True)

    map_id: int
    nickname: str
    mode: Mode
    players: int
    group_id: int
    is_gag: bool = False
    disabled: bool = False

    @field_validator("map_id", "players", "group_id")
    @classmethod
    def validate_u16(cls, v: int, info: ValidationInfo) -> int:
        return _check_u16(info.field_name, v)

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode_name(cls, v: object) -> object:
        # Catalog files spell modes in any case ("td", "Chaser")
        if isinstance(v, str) and not isinstance(v, Mode):
            return Mode(v)
        return v

    @field_validator("nickname")
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        if not v:
            raise ValueError("nickname must be a non-empty string.")
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameMap):
            return NotImplemented
        return self.map_id == other.map_id

    def __hash__(self) -> int:
        return hash(self.map_id)

    @property
    def map_info(self) -> str:
        """One-line label, e.g. ``"Harbor TD (16)"``."""
        return f"{self.nickname} {self.mode} ({self.players})"


class MapGroup(BaseModel):
    """A cluster of map variants sharing one location.

    Two groups are equal iff their ``group_id`` is equal.

    Attributes:
        group_id: Stable group id (``gid`` in the catalog file).
        base_name: Location name shared by all variants.
        map_ids: Member map ids in catalog file order.
    """

    model_config = ConfigDict(frozen=True)

    group_id: int
    base_name: str
    map_ids: tuple[int, ...]

    @field_validator("group_id")
    @classmethod
    def validate_group_id(cls, v: int) -> int:
        return _check_u16("group_id", v)

    @field_validator("base_name")
    @classmethod
    def validate_base_name(cls, v: str) -> str:
        if not v:
            raise ValueError("base_name must be a non-empty string.")
        return v

    @field_validator("map_ids")
    @classmethod
    def validate_members(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("a group needs at least one map variant.")
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapGroup):
            return NotImplemented
        return self.group_id == other.group_id

    def __hash__(self) -> int:
        return hash(self.group_id)


class Catalog:
    """Read-only arena of maps and groups, keyed by id.

    Iteration order of ``all_maps()`` and ``all_groups()`` is catalog file
    order, so downstream scoring and reporting are deterministic.

    Raises:
        ValueError: If a map references an unknown group, a group lists an
            unknown map, or a map is listed by a group other than its own.
    """

    def __init__(self, groups: list[MapGroup], maps: list[GameMap]) -> None:
        self._groups: dict[int, MapGroup] = {g.group_id: g for g in groups}
        self._maps: dict[int, GameMap] = {m.map_id: m for m in maps}

        if len(self._groups) != len(groups):
            raise ValueError("Catalog contains duplicate group ids.")
        if len(self._maps) != len(maps):
            raise ValueError("Catalog contains duplicate map ids.")

        for m in maps:
            group = self._groups.get(m.group_id)
            if group is None:
                raise ValueError(f"Map {m.map_id} references unknown group {m.group_id}.")
            if m.map_id not in group.map_ids:
                raise ValueError(
                    f"Map {m.map_id} is not listed as a member of group {m.group_id}."
                )
        for g in groups:
            for map_id in g.map_ids:
                member = self._maps.get(map_id)
                if member is None or member.group_id != g.group_id:
                    raise ValueError(
                        f"Group {g.group_id} lists map {map_id}, which does not belong to it."
                    )

    def __len__(self) -> int:
        return len(self._maps)

    def __contains__(self, map_id: object) -> bool:
        return map_id in self._maps

    def __iter__(self) -> Iterator[GameMap]:
        return iter(self._maps.values())

    def all_maps(self) -> list[GameMap]:
        """All maps, in catalog file order."""
        return list(self._maps.values())

    def all_groups(self) -> list[MapGroup]:
        """All groups, in catalog file order."""
        return list(self._groups.values())

    def get_map(self, map_id: int) -> Optional[GameMap]:
        return self._maps.get(map_id)

    def get_group(self, group_id: int) -> Optional[MapGroup]:
        return self._groups.get(group_id)

    def group_of(self, game_map: GameMap) -> MapGroup:
        """Return the group that owns ``game_map``."""
        return self._groups[game_map.group_id]

    def maps_in_group(self, group_id: int) -> list[GameMap]:
        """Member maps of a group, in catalog file order."""
        return [self._maps[i] for i in self._groups[group_id].map_ids]
