"""
Version information for the rollup SDK.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "rollup-sdk"
FALLBACK_VERSION = "0.1.0"


def _source_tree_version() -> str:
    """Version declared in pyproject.toml when running from a checkout"""
    pyproject = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        with pyproject.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return FALLBACK_VERSION


def resolve_version() -> str:
    """Installed distribution version, else the source tree's, else the fallback."""
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return _source_tree_version()


__version__ = resolve_version()
