import json

import pytest
from typer.testing import CliRunner

from minegen.cli import EXIT_CONFIG_ERROR, app
from minegen.level.world_config import WorldConfig
from minegen.level.world_generator import generate_world
from minegen.utils.tile_utils import grid_to_rows


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestGenerateCommand:
    """Test the generate command."""

    def test_prints_seed(self, runner):
        result = runner.invoke(app, ["generate", "--width", "30", "--height", "30", "--seed", "7", "--no-show"])

        assert result.exit_code == 0, result.output
        assert "Seed: 7" in result.output
        assert "Veins:" in result.output

    def test_prints_map(self, runner):
        result = runner.invoke(app, ["generate", "--width", "30", "--height", "24", "--seed", "7"])

        assert result.exit_code == 0, result.output
        world = generate_world(WorldConfig(world_width=30, world_height=24, seed=7))
        for row in grid_to_rows(world.grid, world):
            assert row in result.output

    def test_writes_json(self, runner, tmp_path):
        out = tmp_path / "out" / "world.json"

        result = runner.invoke(app, [
            "generate", "--width", "40", "--height", "30", "--seed", "3",
            "--outposts", "2", "--no-show", "--json", str(out),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["seed"] == 3
        assert data["width"] == 40
        assert data["config"]["outpost_count"] == 2

    def test_config_file_and_overrides(self, runner, tmp_path):
        config_path = tmp_path / "world.json"
        config_path.write_text(json.dumps({"world_width": 50, "world_height": 50, "seed": 11}))
        out = tmp_path / "world_out.json"

        result = runner.invoke(app, [
            "generate", "--config", str(config_path), "--seed", "12", "--no-show", "--json", str(out),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["seed"] == 12
        assert data["width"] == 50

    def test_custom_template(self, runner, tmp_path):
        template = tmp_path / "hut.json"
        template.write_text(json.dumps({"name": "hut", "layout": ["===", "=O=", "==="]}))
        out = tmp_path / "world.json"

        result = runner.invoke(app, [
            "generate", "--width", "40", "--height", "40", "--seed", "5",
            "--outpost-template", str(template), "--no-show", "--json", str(out),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        outposts = [p for p in data["placements"] if p["kind"] == "outpost"]
        assert all(p["template"] == "hut" for p in outposts)

    def test_invalid_size_exits_with_config_error(self, runner):
        result = runner.invoke(app, ["generate", "--width", "0", "--no-show"])

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "world_width" in result.output


class TestCheckConfigCommand:
    """Test the check-config command."""

    def test_valid(self, runner, tmp_path):
        path = tmp_path / "world.json"
        path.write_text(json.dumps({"world_width": 60, "world_height": 40}))

        result = runner.invoke(app, ["check-config", str(path)])

        assert result.exit_code == 0, result.output
        assert "Configuration OK" in result.output

    def test_invalid(self, runner, tmp_path):
        path = tmp_path / "world.json"
        path.write_text(json.dumps({"world_width": 8, "fill_percentage": 3}))

        result = runner.invoke(app, ["check-config", str(path)])

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "fill_percentage" in result.output
        assert "spawn_area" in result.output
