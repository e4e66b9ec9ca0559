"""Shared pytest fixtures for transpiler tests."""

from pathlib import Path

import pytest

from descriptor_transpiler.core.descriptor import AppDescriptor
from descriptor_transpiler.core.loader import parse_descriptor

SHOP_DESCRIPTOR = """\
apiVersion: v1
name: shop
tribe: commerce
team: checkout
type: service
public: true
size: medium
dependencies:
  database:
    type: postgres
    size: large
    version: 16
"""


@pytest.fixture
def shop_yaml() -> str:
    """Return the YAML for a medium app with a large postgres database."""
    return SHOP_DESCRIPTOR


@pytest.fixture
def shop_descriptor(shop_yaml: str) -> AppDescriptor:
    """Return the parsed shop descriptor."""
    return parse_descriptor(shop_yaml)


@pytest.fixture
def descriptor_file(tmp_path: Path, shop_yaml: str) -> Path:
    """Write the shop descriptor to a temporary app.yaml."""
    path = tmp_path / "app.yaml"
    path.write_text(shop_yaml)
    return path
