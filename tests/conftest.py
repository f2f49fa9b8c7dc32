from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the src/ directory is importable when tests run without installation.
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from fake_backend import FakeBackend  # noqa: E402


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
