# tests/conftest.py
# Shared fixtures for the dumpmask test suite.

from pathlib import Path
from typing import Callable

import pytest

from dumpmask.config import DumpMaskConfig
from dumpmask.core.layout import BlockLayout, McuFamily, layout_for
from dumpmask.core.pattern import Endianness, SentinelPattern, encode


@pytest.fixture
def pattern() -> SentinelPattern:
    """Default sentinel: d00dbeef stored little-endian (EF BE 0D D0)."""
    return encode("d00dbeef", Endianness.NATIVE)


@pytest.fixture
def swap_pattern() -> SentinelPattern:
    """Default sentinel with endianness swap: stored as D0 0D BE EF."""
    return encode("d00dbeef", Endianness.SWAP)


@pytest.fixture
def layout() -> BlockLayout:
    return layout_for(McuFamily.STM32F1)


@pytest.fixture
def config() -> DumpMaskConfig:
    return DumpMaskConfig()


@pytest.fixture
def make_dump(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory: write `data` to tmp_path/name and return the path."""
    def _make(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _make
