"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def save_client(tmp_path: Path):
    """SDK client rooted in a per-test temporary directory."""
    from core.config import SaveKitConfig
    from store.save_client import SaveKitClient

    config = replace(SaveKitConfig.from_env(), storage_root=tmp_path)
    return SaveKitClient(config)
