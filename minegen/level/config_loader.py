"""Load WorldConfig from JSON files or plain dictionaries."""

import json
from dataclasses import fields
from typing import Any, Dict, List, Optional

from minegen.level.world_config import (
    BoundaryMode,
    ConfigurationError,
    OreClusterConfig,
    SpawnPlacement,
    WorldConfig,
)
from minegen.tiles.tile_types import OreKind


_WORLD_FIELDS = {f.name for f in fields(WorldConfig)}
_ORE_FIELDS = {f.name for f in fields(OreClusterConfig)}

_INT_FIELDS = (
    "world_width", "world_height", "seed", "smooth_iterations",
    "boundary_width", "corner_size", "outpost_count",
)
_FLOAT_FIELDS = ("noise_scale", "fill_percentage")


def world_config_from_dict(data: Dict[str, Any]) -> WorldConfig:
    """
    Build a WorldConfig from a JSON-compatible dictionary.

    Missing keys keep their defaults. Every problem (unknown keys, wrong
    types, unknown ore kinds) is collected into one ConfigurationError.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(["configuration must be a JSON object"])

    errors: List[str] = []
    kwargs: Dict[str, Any] = {}

    for key in sorted(set(data) - _WORLD_FIELDS):
        errors.append(f"unknown configuration key {key!r}")

    for key in _INT_FIELDS:
        if key in data:
            value = _coerce(data[key], int, key, errors)
            if value is not None:
                kwargs[key] = value
    for key in _FLOAT_FIELDS:
        if key in data:
            value = _coerce(data[key], float, key, errors)
            if value is not None:
                kwargs[key] = value

    if "boundary_mode" in data:
        try:
            kwargs["boundary_mode"] = BoundaryMode(str(data["boundary_mode"]).lower())
        except ValueError:
            errors.append(f"boundary_mode must be one of {[m.value for m in BoundaryMode]}")
    if "spawn_placement" in data:
        try:
            kwargs["spawn_placement"] = SpawnPlacement(str(data["spawn_placement"]).lower())
        except ValueError:
            errors.append(f"spawn_placement must be one of {[m.value for m in SpawnPlacement]}")

    if "ore_clusters" in data:
        raw_clusters = data["ore_clusters"]
        if not isinstance(raw_clusters, list):
            errors.append("ore_clusters must be a list")
        else:
            clusters = []
            for index, raw in enumerate(raw_clusters):
                cluster = _ore_cluster_from_dict(raw, index, errors)
                if cluster is not None:
                    clusters.append(cluster)
            kwargs["ore_clusters"] = clusters

    if errors:
        raise ConfigurationError(errors)
    return WorldConfig(**kwargs)


def _ore_cluster_from_dict(raw: Any, index: int, errors: List[str]) -> Optional[OreClusterConfig]:
    label = f"ore_clusters[{index}]"
    if not isinstance(raw, dict):
        errors.append(f"{label} must be an object")
        return None

    before = len(errors)
    for key in sorted(set(raw) - _ORE_FIELDS):
        errors.append(f"{label}: unknown key {key!r}")

    kind = None
    if "kind" not in raw:
        errors.append(f"{label}: missing 'kind'")
    else:
        try:
            kind = OreKind.from_name(raw["kind"])
        except ValueError as exc:
            errors.append(f"{label}: {exc}")

    kwargs: Dict[str, Any] = {}
    for key, cast in (("vein_count", int), ("vein_distance", float), ("vein_size", int)):
        if key in raw:
            value = _coerce(raw[key], cast, f"{label}.{key}", errors)
            if value is not None:
                kwargs[key] = value

    if len(errors) > before:
        return None
    return OreClusterConfig(kind=kind, **kwargs)


def _coerce(value: Any, cast, key: str, errors: List[str]):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors.append(f"{key} must be a number, got {value!r}")
        return None
    if cast is int and isinstance(value, float) and not value.is_integer():
        errors.append(f"{key} must be an integer, got {value!r}")
        return None
    return cast(value)


def load_world_config(filepath: str) -> WorldConfig:
    """Load a WorldConfig from a JSON file."""
    with open(filepath, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError([f"{filepath}: invalid JSON ({exc})"]) from exc
    return world_config_from_dict(data)


def world_config_to_dict(config: WorldConfig) -> Dict[str, Any]:
    """Inverse of world_config_from_dict, for writing config files."""
    return {
        "world_width": config.world_width,
        "world_height": config.world_height,
        "seed": config.seed,
        "noise_scale": config.noise_scale,
        "fill_percentage": config.fill_percentage,
        "smooth_iterations": config.smooth_iterations,
        "boundary_mode": config.boundary_mode.value,
        "boundary_width": config.boundary_width,
        "corner_size": config.corner_size,
        "outpost_count": config.outpost_count,
        "spawn_placement": config.spawn_placement.value,
        "ore_clusters": [
            {
                "kind": cluster.kind.value,
                "vein_count": cluster.vein_count,
                "vein_distance": cluster.vein_distance,
                "vein_size": cluster.vein_size,
            }
            for cluster in config.ore_clusters
        ],
    }
