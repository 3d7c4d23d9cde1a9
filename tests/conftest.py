# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds src to sys.path so `import consentrelay` works without installing.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tests.fakes import FakeRegistry, FakeSink  # noqa: E402
from consentrelay.core.errors import TransportError  # noqa: E402


@pytest.fixture
def registry():
    return FakeRegistry()


@pytest.fixture
def unreachable_registry():
    return FakeRegistry(error=TransportError(message="Timeout: POST http://registry/MTBFile"))


@pytest.fixture
def sink():
    return FakeSink()

