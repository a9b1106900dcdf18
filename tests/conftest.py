"""Pytest configuration and fixtures. Tests never hit the network."""
from __future__ import annotations

import os
import sys

import pytest

# Modules live flat under src/
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))


@pytest.fixture(autouse=True)
def _fresh_writer():
    """Each test resolves the process-wide metadata writer from scratch."""
    from metadata_writer import reset_metadata_writer
    reset_metadata_writer()
    yield
    reset_metadata_writer()


@pytest.fixture
def writer():
    from metadata_writer import resolve_metadata_writer
    return resolve_metadata_writer()


@pytest.fixture
def utils(writer):
    from skull_utils import SkullUtils
    return SkullUtils(writer)


@pytest.fixture
def meta():
    from skull_meta import ItemStack
    return ItemStack().get_item_meta()
