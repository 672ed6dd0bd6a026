"""pytest configuration for edward tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from edward import EDWARD_VERSION

GO_MAIN = """// Command {name} is a test service.
package main

import "fmt"

func main() {{
\tfmt.Println("{name}")
}}
"""


def add_go_service(root: Path, relpath: str) -> Path:
    """Create a ``package main`` Go command at *root*/*relpath*."""
    directory = root / relpath
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "main.go").write_text(GO_MAIN.format(name=directory.name), encoding="utf-8")
    return directory


def write_config(path: Path, services: list[str], groups: dict[str, list[str]] | None = None) -> None:
    """Write an ``edward.json`` naming *services* (paths equal to names)."""
    data = {
        "edwardVersion": EDWARD_VERSION,
        "imports": [],
        "groups": [
            {"name": name, "children": children}
            for name, children in (groups or {}).items()
        ],
        "services": [
            {"name": name, "path": name, "commands": {"build": "go install", "launch": name}}
            for name in services
        ],
    }
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def go_service():
    return add_go_service


@pytest.fixture
def config_writer():
    return write_config
