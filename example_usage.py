"""
Example usage of the options adapter.

Shows how a compiler-initialization path translates a normalized
configuration into the engine's canonical options, and what the module
rules look like after encoding.
"""

import re

from options_adapter import PreconditionViolation, translate_options
from options_adapter.compiler.canonicalizer import to_canonical_json_pretty
from options_adapter.core.config import settings
from options_adapter.core.observability import configure_structured_logging


class ExampleCompiler:
    """Stands in for the owning compiler instance."""


NORMALIZED = {
    "context": "/srv/app",
    "mode": "production",
    "entry": {"main": {"import": ["./src/index.js"], "runtime": False}},
    "target": "web",
    "devtool": False,
    "cache": False,
    "output": {
        "path": "/srv/app/dist",
        "publicPath": "auto",
        "assetModuleFilename": "[hash][ext][query]",
        "filename": "[name].[contenthash].js",
        "chunkFilename": "[id].[contenthash].js",
        "cssFilename": "[name].css",
        "cssChunkFilename": "[id].css",
        "uniqueName": "app",
        "strictModuleErrorHandling": False,
    },
    "module": {
        "defaultRules": [{"test": re.compile(r"\.json$"), "type": "json"}],
        "rules": [
            {
                "test": re.compile(r"\.svg$"),
                "oneOf": [
                    {"resourceQuery": "inline", "type": "asset/inline"},
                    {"issuer": {"not": [re.compile(r"\.css$")]}, "use": "svgr-loader"},
                ],
            }
        ],
    },
    "externals": "react",
    "optimization": {
        "moduleIds": "deterministic",
        "removeAvailableModules": True,
        "sideEffects": True,
        "splitChunks": {"cacheGroups": {"vendors": {"test": re.compile("node_modules")}}},
    },
    "snapshot": {
        "resolve": {"timestamp": True, "hash": False},
        "module": {"timestamp": True, "hash": False},
    },
    "experiments": {"lazyCompilation": False, "incrementalRebuild": False},
    "node": {"__dirname": "mock"},
}


def main() -> None:
    configure_structured_logging(settings.log_level, settings.structured_logs)

    raw = translate_options(NORMALIZED, ExampleCompiler())
    print(to_canonical_json_pretty(raw["module"]))

    # Defaulting must run first: a missing defaultRules list aborts translation
    broken = dict(NORMALIZED, module={"rules": []})
    try:
        translate_options(broken, ExampleCompiler())
    except PreconditionViolation as e:
        print(f"translation aborted: {e.message} {e.details}")


if __name__ == "__main__":
    main()
