"""
Unit tests for package __init__.py files

Checks that version attributes are defined and that every name listed in
__all__ is importable.
"""

import importlib

import pytest


@pytest.mark.parametrize("package", ["directives", "dlp", "utils"])
def test_version_attribute(package):
    module = importlib.import_module(package)
    assert module.__version__ == "1.0.0"


@pytest.mark.parametrize("package", ["directives", "dlp", "utils.logging", "utils.tracing"])
def test_all_exports_exist(package):
    module = importlib.import_module(package)
    for name in module.__all__:
        assert hasattr(module, name), f"{package} is missing {name}"


@pytest.mark.parametrize("submodule", ["logging", "tracing", "retry"])
def test_utils_submodules_import(submodule):
    assert importlib.import_module(f"utils.{submodule}") is not None


def test_registry_contains_both_directives():
    from directives import DIRECTIVES, MaskDirective, RedactDirective, get_directive

    assert set(DIRECTIVES) == {"redact", "mask-sensitive-data"}
    assert get_directive("redact") is RedactDirective
    assert get_directive("mask-sensitive-data") is MaskDirective


def test_registry_unknown_directive():
    from directives import get_directive

    with pytest.raises(KeyError, match="Available: mask-sensitive-data, redact"):
        get_directive("tokenize")
