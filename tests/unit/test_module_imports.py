"""
Import smoke tests.

Every application module must import cleanly; a syntax error in any of
them fails here with the module's name.

Run: pytest tests/unit/test_module_imports.py -v
"""

import importlib
import pkgutil
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).parent.parent.parent
PACKAGES = ["config", "exceptions", "models", "parsers", "services", "routes", "utils"]


def _application_modules() -> list[str]:
    modules = ["main"]
    for package in PACKAGES:
        modules.append(package)
        for info in pkgutil.iter_modules([str(PROJECT_DIR / package)]):
            modules.append(f"{package}.{info.name}")
    return modules


def test_all_packages_have_modules():
    modules = _application_modules()

    assert "parsers.csv_parser" in modules
    assert "services.catalog_import_service" in modules
    assert "utils.text_utils" in modules


@pytest.mark.parametrize("module_name", _application_modules())
def test_module_imports(module_name):
    """Module loads and registers under its dotted name."""
    module = importlib.import_module(module_name)

    assert module.__name__ == module_name
