"""Tests for architecture import boundaries.

These tests ensure the layering is maintained:
- Domain code must not import infrastructure, transformations or CLI
- Application and transformation code must not import infrastructure or CLI
- Only the CLI may import the CLI
"""

from __future__ import annotations

import ast
from pathlib import Path
import re

import pytest

# Root of the msmprep package
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / "msmprep"


def get_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory recursively."""
    return list(directory.rglob("*.py"))


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Extract all imported module names from a Python file.

    Relative imports are returned without their leading dots, so
    ``from ...infrastructure.io import CSVReader`` yields
    ``infrastructure.io``.
    """
    imports = []
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            imports.append(node.module)
    return imports


def has_forbidden_import(imports: list[str], forbidden_pattern: str) -> list[str]:
    pattern = re.compile(forbidden_pattern)
    return [imp for imp in imports if pattern.search(imp)]


def find_violations(layer: str, forbidden: str) -> list[str]:
    layer_dir = PACKAGE_ROOT / layer
    if not layer_dir.exists():
        pytest.skip(f"{layer} directory not found")
    violations = []
    for py_file in get_python_files(layer_dir):
        matches = has_forbidden_import(
            extract_imports_from_file(py_file), rf"(^|\.){forbidden}(\.|$)"
        )
        if matches:
            rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
            violations.append(f"{rel_path}: {matches}")
    return violations


@pytest.mark.parametrize(
    "layer,forbidden",
    [
        ("domain", "cli"),
        ("domain", "infrastructure"),
        ("domain", "transformations"),
        ("application", "cli"),
        ("application", "infrastructure"),
        ("transformations", "cli"),
        ("transformations", "infrastructure"),
        ("infrastructure", "cli"),
    ],
)
def test_layer_boundaries(layer, forbidden):
    """Inner layers must not depend on outer ones."""
    violations = find_violations(layer, forbidden)
    assert not violations, f"{layer} imports {forbidden} modules:\n" + "\n".join(
        violations
    )


def test_package_root_exists():
    assert (PACKAGE_ROOT / "__init__.py").exists()
