"""
Per-section encoders for the flat parts of the canonical options.

Each encoder checks its own required-after-defaulting fields, then narrows
or copies the section into the shape the engine reads.
"""

from collections.abc import Mapping
from typing import Any

from options_adapter.compiler.optimization import to_text
from options_adapter.compiler.preconditions import require_fields
from options_adapter.core.errors import UnsupportedShapeError
from options_adapter.domain.enums import CacheType

OUTPUT_REQUIRED_FIELDS = (
    "path",
    "publicPath",
    "assetModuleFilename",
    "filename",
    "chunkFilename",
    "cssFilename",
    "cssChunkFilename",
    "uniqueName",
    "strictModuleErrorHandling",
)

SNAPSHOT_REQUIRED_FIELDS = (
    "resolve.timestamp",
    "resolve.hash",
    "module.timestamp",
    "module.hash",
)


def encode_entry(entry: Mapping[str, Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    """
    Encode entry points.

    A runtime of False means "no runtime" and is omitted, like an absent one.

    Raises:
        PreconditionViolation: If an entry has no import list
        UnsupportedShapeError: If an import value is not a list of modules
    """
    encoded: dict[str, dict[str, Any]] = {}
    for name, descriptor in entry.items():
        require_fields(f"entry.{name}", descriptor, ("import",))
        imports = descriptor["import"]
        if not isinstance(imports, (list, tuple)):
            raise UnsupportedShapeError(
                f"entry.{name}: 'import' must be a list of modules, got {type(imports).__name__}",
                details={"path": f"entry.{name}.import", "type": type(imports).__name__},
            )
        raw: dict[str, Any] = {"import": list(imports)}
        runtime = descriptor.get("runtime")
        if runtime is not None and runtime is not False:
            raw["runtime"] = runtime
        encoded[name] = raw
    return encoded


def encode_target(target: str | list[str] | None) -> list[str]:
    """Encode the target as a list: absent is empty, a single name is wrapped."""
    if not target:
        return []
    if isinstance(target, str):
        return [target]
    return list(target)


def encode_output(output: Mapping[str, Any]) -> dict[str, Any]:
    """
    Encode output paths and filenames.

    Raises:
        PreconditionViolation: If any path, filename or naming field is missing
    """
    require_fields("output", output, OUTPUT_REQUIRED_FIELDS)

    encoded = {field: output[field] for field in OUTPUT_REQUIRED_FIELDS}
    if output.get("library") is not None:
        encoded["library"] = output["library"]
    return encoded


def encode_externals(externals: Any) -> Any:
    """
    Encode externals.

    A single module name maps to itself: "react" -> {"react": "react"}.
    Absent externals become an empty mapping; other shapes pass through.
    """
    if not externals:
        return {}
    if isinstance(externals, str):
        return {externals: externals}
    if isinstance(externals, Mapping):
        return dict(externals)
    return externals


def encode_snapshot(snapshot: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """
    Encode the snapshot policy as resolve and module sections.

    Raises:
        PreconditionViolation: If either section or any timestamp/hash flag is missing
    """
    require_fields("snapshot", snapshot, ("resolve", "module"))
    require_fields("snapshot", snapshot, SNAPSHOT_REQUIRED_FIELDS)

    resolve, module = snapshot["resolve"], snapshot["module"]
    return {
        "resolve": {"timestamp": resolve["timestamp"], "hash": resolve["hash"]},
        "module": {"timestamp": module["timestamp"], "hash": module["hash"]},
    }


def encode_experiments(experiments: Mapping[str, Any]) -> dict[str, Any]:
    require_fields("experiments", experiments, ("lazyCompilation", "incrementalRebuild"))
    return {
        "lazyCompilation": experiments["lazyCompilation"],
        "incrementalRebuild": experiments["incrementalRebuild"],
    }


def encode_node(node: Mapping[str, Any]) -> dict[str, str]:
    """Encode node globals; the __dirname marker is sent as text."""
    require_fields("node", node, ("__dirname",))
    return {"dirname": to_text(node["__dirname"])}


def encode_stats(stats: Any) -> dict[str, bool]:
    """
    Encode stats output settings.

    Preset names and booleans carry no color setting, only a stats mapping can.
    """
    colors = stats.get("colors") if isinstance(stats, Mapping) else None
    return {"colors": bool(colors) if colors is not None else False}


def encode_dev_server(dev_server: Mapping[str, Any] | None) -> dict[str, bool]:
    hot = dev_server.get("hot") if dev_server else None
    return {"hot": bool(hot) if hot is not None else False}


def encode_cache(cache: Any) -> dict[str, Any]:
    """
    Encode the cache descriptor.

    Only the on/off switch is honored; the tuning fields are fixed.
    """
    return {
        "type": CacheType.DISABLE.value if cache is False else CacheType.MEMORY.value,
        # TODO: pass the cache tuning fields through once the engine reads them
        "maxGenerations": 0,
        "maxAge": 0,
        "profile": False,
        "buildDependencies": [],
        "cacheDirectory": "",
        "cacheLocation": "",
        "name": "",
        "version": "",
    }
