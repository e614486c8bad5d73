"""
Pytest configuration and shared fixtures for options adapter tests.

Provides:
- AnyIO backend selection
- A fully defaulted normalized configuration (as the defaulting stage emits it)
- A recording loader-chain encoder for checking delegation
- A stand-in compiler handle
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Add the project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402 (import after path setup)

from options_adapter.compiler.rule_use import UseChainContext  # noqa: E402
from tests.factories import make_normalized_options  # noqa: E402


# =============================================================================
# AnyIO Backend Configuration
# =============================================================================
@pytest.fixture
def anyio_backend():
    return "asyncio"


# =============================================================================
# Collaborators
# =============================================================================


class FakeCompiler:
    """Opaque compiler handle; the adapter only forwards it."""

    def __repr__(self) -> str:
        return "<FakeCompiler>"


class RecordingUseEncoder:
    """Loader-chain encoder that records every call and echoes its input."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, UseChainContext]] = []

    def __call__(self, use: Any, context: UseChainContext) -> list:
        self.calls.append((use, context))
        return [{"encoded": use}]


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def use_context(fake_compiler: FakeCompiler) -> UseChainContext:
    return UseChainContext(compiler=fake_compiler, devtool="source-map", context="/project")


@pytest.fixture
def recording_use_encoder() -> RecordingUseEncoder:
    return RecordingUseEncoder()


# =============================================================================
# Normalized configuration
# =============================================================================


@pytest.fixture
def normalized_options() -> dict[str, Any]:
    return make_normalized_options()
