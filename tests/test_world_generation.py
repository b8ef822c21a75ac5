"""
End-to-end tests for the world generation pipeline.
"""

import dataclasses
import itertools
import json
import math

import pytest

from minegen.level.area_placement import PlacementKind, min_outpost_distance
from minegen.level.area_template import (
    OUTPOST_MARKER,
    PROTECTED_AIR,
    PROTECTED_WALL,
    SPAWN_MARKER,
    AreaTemplate,
)
from minegen.level.world_config import (
    BoundaryMode,
    ConfigurationError,
    OreClusterConfig,
    SpawnPlacement,
    WorldConfig,
)
from minegen.level.world_generator import WorldGenerator, generate_world
from minegen.tiles.tile_types import OreKind, TileType
from minegen.utils.tile_utils import grid_to_rows, result_to_dict


@pytest.fixture
def fixed_spawn_config() -> WorldConfig:
    """Large world with a fixed spawn and one outpost"""
    return WorldConfig(
        world_width=80,
        world_height=80,
        seed=1234,
        outpost_count=1,
        spawn_placement=SpawnPlacement.FIXED,
    )


def _assert_stamp_survived(grid, record):
    template = record.template
    start_x, start_y = record.anchor
    for dy in range(template.height):
        for dx in range(template.width):
            x, y = start_x + dx, start_y + dy
            symbol = template.symbol_at(dx, dy)
            if symbol == PROTECTED_WALL:
                assert grid.get(x, y) == TileType.WALL
                assert grid.is_protected(x, y)
            elif symbol in (PROTECTED_AIR, SPAWN_MARKER, OUTPOST_MARKER):
                assert grid.get(x, y) == TileType.AIR
                assert grid.is_protected(x, y)


class TestDeterminism:
    """Same seed and config must give the same world."""

    def test_same_seed_same_world(self):
        config = WorldConfig(world_width=20, world_height=20, seed=42)

        first = WorldGenerator(config).generate()
        second = WorldGenerator(config).generate()

        assert first.seed == 42
        assert first.snapshot() == second.snapshot()
        assert first.events == second.events
        assert [v.cells for v in first.veins] == [v.cells for v in second.veins]

    def test_different_seeds_differ(self):
        a = generate_world(WorldConfig(world_width=40, world_height=40, seed=1))
        b = generate_world(WorldConfig(world_width=40, world_height=40, seed=2))
        assert a.snapshot() != b.snapshot()

    def test_zero_seed_is_resolved_and_reproducible(self):
        config = WorldConfig(world_width=30, world_height=30, seed=0)

        result = WorldGenerator(config).generate()
        assert result.seed != 0

        again = WorldGenerator(dataclasses.replace(config, seed=result.seed)).generate()
        assert again.snapshot() == result.snapshot()


class TestSmallWorld:
    """20x20 world with the bundled templates."""

    def test_spawn_too_wide_is_skipped(self):
        result = generate_world(WorldConfig(world_width=20, world_height=20, seed=42))

        assert result.spawn_position is None
        assert len(result.outpost_positions) <= 3
        for x, y in result.outpost_positions:
            assert result.grid.get(x, y) == TileType.AIR
            assert result.grid.is_protected(x, y)

    def test_single_outpost_reproducible(self):
        """Fill 0.45, 3 passes, one outpost and one small coal vein"""
        config = WorldConfig(
            world_width=20,
            world_height=20,
            seed=42,
            fill_percentage=0.45,
            smooth_iterations=3,
            outpost_count=1,
            ore_clusters=[OreClusterConfig(OreKind.COAL, vein_count=1, vein_size=6)],
        )

        first = generate_world(config)
        second = generate_world(config)

        assert first.snapshot() == second.snapshot()
        assert [r.anchor for r in first.placements] == [r.anchor for r in second.placements]
        assert first.outpost_positions == second.outpost_positions
        for record in first.placements:
            _assert_stamp_survived(first.grid, record)
        for vein in first.veins:
            assert vein.size <= vein.target_size <= OreClusterConfig(OreKind.COAL, vein_size=6).max_vein_size

    def test_border_is_boundary(self):
        result = generate_world(WorldConfig(world_width=20, world_height=20, seed=42))
        grid = result.grid
        for x, y in grid.cells():
            if x in (0, 19) or y in (0, 19):
                assert grid.get(x, y) == TileType.BOUNDARY
                assert grid.is_protected(x, y)


class TestPlacementInvariants:
    """Stamped areas and spacing survive the whole pipeline."""

    def test_fixed_spawn_and_outpost(self, fixed_spawn_config):
        result = generate_world(fixed_spawn_config)

        kinds = [record.kind for record in result.placements]
        assert kinds == [PlacementKind.SPAWN, PlacementKind.OUTPOST]
        assert result.placements[0].anchor == (35, 56)
        assert result.spawn_position == (40, 58)
        assert len(result.outpost_positions) == 1

    def test_stamps_survive_smoothing_and_ore(self, fixed_spawn_config):
        result = generate_world(fixed_spawn_config)

        for record in result.placements:
            _assert_stamp_survived(result.grid, record)

    def test_spacing_law(self):
        config = WorldConfig(world_width=100, world_height=100, seed=77, outpost_count=5)

        result = generate_world(config)

        distance = min_outpost_distance(100, 100, 5)
        assert len(result.placements) >= 2
        for a, b in itertools.combinations(result.placements, 2):
            assert math.dist(a.center, b.center) >= distance

    def test_outposts_stay_off_boundary(self):
        config = WorldConfig(world_width=60, world_height=60, seed=5, boundary_width=3)

        result = generate_world(config)

        for record in result.placements:
            rect = record.rect
            assert rect.left >= 3 and rect.top >= 3
            assert rect.right <= 57 and rect.bottom <= 57


class TestOreInvariants:
    """Ore only grows into unprotected rock near its seed."""

    def test_ore_containment(self):
        config = WorldConfig(world_width=80, world_height=80, seed=2024)

        result = generate_world(config)
        grid = result.grid
        radius = {cluster.kind: cluster.growth_radius for cluster in config.ore_clusters}

        assert result.veins
        for vein in result.veins:
            for x, y in vein.cells:
                assert math.dist((x, y), vein.origin) <= radius[vein.kind] + 1e-9
                assert grid.get(x, y) == TileType.ORE
                assert grid.ore_at(x, y) is vein.kind
                assert not grid.is_protected(x, y)
        assert grid.count(TileType.ORE) == sum(vein.size for vein in result.veins)

    def test_ore_never_on_protected_cells(self):
        result = generate_world(WorldConfig(world_width=60, world_height=60, seed=8))
        for x, y in result.grid.protected_cells():
            assert result.grid.get(x, y) != TileType.ORE

    def test_no_clusters_no_ore(self):
        config = WorldConfig(world_width=40, world_height=40, seed=3, ore_clusters=[])
        result = generate_world(config)
        assert result.veins == []
        assert result.grid.count(TileType.ORE) == 0


class TestConfigurationModes:
    """Boundary modes and degenerate settings."""

    def test_empty_fill_gives_open_world(self):
        config = WorldConfig(
            world_width=20,
            world_height=20,
            seed=9,
            fill_percentage=0.0,
            smooth_iterations=0,
            boundary_width=0,
            outpost_count=0,
            ore_clusters=[],
        )

        result = generate_world(config)

        assert result.grid.count(TileType.AIR) == 400
        assert result.events == []

    def test_corner_mode(self):
        config = WorldConfig(
            world_width=30,
            world_height=30,
            seed=11,
            boundary_mode=BoundaryMode.CORNERS,
            corner_size=4,
        )

        grid = generate_world(config).grid

        for x, y in [(0, 0), (3, 3), (29, 0), (26, 3), (0, 29), (29, 29)]:
            assert grid.get(x, y) == TileType.BOUNDARY
        assert grid.count(TileType.BOUNDARY) == 4 * 16
        assert grid.get(15, 0) != TileType.BOUNDARY

    def test_custom_templates(self):
        spawn = AreaTemplate("cell", ("===", "=P=", "==="))
        outpost = AreaTemplate("hut", ("=O=",))
        config = WorldConfig(world_width=40, world_height=40, seed=6, outpost_count=2)

        result = WorldGenerator(config, spawn_template=spawn, outpost_template=outpost).generate()

        assert result.spawn_position is not None
        assert result.placements[0].template is spawn
        assert all(r.template is outpost for r in result.placements[1:])


class TestValidation:
    """Structural errors are reported before generation starts."""

    def test_errors_are_aggregated(self):
        config = WorldConfig(world_width=0, fill_percentage=2.0, outpost_count=-1)

        with pytest.raises(ConfigurationError) as excinfo:
            WorldGenerator(config).generate()

        errors = excinfo.value.errors
        assert len(errors) >= 3
        assert any("world_width" in e for e in errors)
        assert any("fill_percentage" in e for e in errors)
        assert any("outpost_count" in e for e in errors)

    def test_oversized_template(self):
        config = WorldConfig(world_width=5, world_height=5)

        with pytest.raises(ConfigurationError) as excinfo:
            generate_world(config)

        assert any("spawn_area" in e for e in excinfo.value.errors)

    def test_bad_ore_cluster(self):
        config = WorldConfig(ore_clusters=[OreClusterConfig(OreKind.GOLD, vein_count=0, vein_size=-1)])

        with pytest.raises(ConfigurationError) as excinfo:
            WorldGenerator(config).validate()

        assert len(excinfo.value.errors) == 2

    def test_valid_config_passes(self):
        WorldGenerator(WorldConfig()).validate()


class TestResultExport:
    """Text and JSON views of a result."""

    def test_rows_top_down(self):
        result = generate_world(WorldConfig(world_width=25, world_height=15, seed=3))

        rows = grid_to_rows(result.grid)

        assert len(rows) == 15
        assert all(len(row) == 25 for row in rows)
        assert rows[0][0] == TileType.BOUNDARY.symbol
        assert rows[0] == "".join(
            TileType.BOUNDARY.symbol for _ in range(25)
        )

    def test_markers_overlaid(self, fixed_spawn_config):
        result = generate_world(fixed_spawn_config)

        rows = grid_to_rows(result.grid, result)

        x, y = result.spawn_position
        assert rows[result.grid.height - 1 - y][x] == "P"
        for x, y in result.outpost_positions:
            assert rows[result.grid.height - 1 - y][x] == "O"

    def test_dict_is_json_serializable(self):
        result = generate_world(WorldConfig(world_width=30, world_height=30, seed=21))

        data = json.loads(json.dumps(result_to_dict(result)))

        assert data["seed"] == 21
        assert data["width"] == 30 and data["height"] == 30
        assert len(data["tiles"]) == 30
        assert len(data["events"]) == len(result.events)
        assert data["config"]["world_width"] == 30
