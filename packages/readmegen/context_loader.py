"""Context file and assignment loading for readmegen.

A context file is a flat TOML or YAML table mapping placeholder names to
scalar values, for example::

    crate = "cargo-readme"
    license = "MIT OR Apache-2.0"

All values are converted to text before rendering.
"""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress
from pathlib import Path
from typing import cast

import tomlkit
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from tomlkit import exceptions

from readmegen.errors import ContextFileError
from readmegen.renderer import is_placeholder_name

TOML_SUFFIXES = frozenset({".toml"})
YAML_SUFFIXES = frozenset({".yml", ".yaml"})


def load_yaml(content: str) -> dict[str, object] | None:
    """Load a YAML context document.

    Used by load_context_file for ``.yml`` and ``.yaml`` files. Parse errors
    and documents that are not a top-level mapping, such as a list or an
    empty file, both return None. The caller reports None as an invalid
    table.

    Args:
        content: YAML content as string

    Returns:
        Parsed mapping or None
    """
    yaml = YAML(typ="safe")
    with suppress(YAMLError):
        data = yaml.load(content)
        if isinstance(data, dict):
            return cast(dict[str, object], data)
    return None


def load_toml(content: str) -> dict[str, object] | None:
    """Load TOML content as plain Python values.

    Args:
        content: TOML content as string

    Returns:
        Parsed dictionary or None if content is not valid TOML
    """
    with suppress(exceptions.TOMLKitError):
        return cast(dict[str, object], tomlkit.parse(content).unwrap())
    return None


def _stringify(key: str, value: object, path: Path) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ContextFileError(f"{path}: value for {key!r} must be a string, number or boolean")


def load_context_file(path: Path) -> dict[str, str]:
    """Read placeholder values from a TOML or YAML context file.

    Args:
        path: Context file path; the suffix selects the format

    Returns:
        Placeholder name to text mapping

    Raises:
        ContextFileError: If the file is unreadable, unparseable, has an
            unsupported suffix or is not a flat table of scalar values
    """
    suffix = path.suffix.lower()
    if suffix not in TOML_SUFFIXES | YAML_SUFFIXES:
        raise ContextFileError(f"{path}: unsupported context file type {suffix or '(none)'!r}, use .toml or .yaml")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContextFileError(f"{path}: cannot read context file: {e}") from e

    data = load_toml(content) if suffix in TOML_SUFFIXES else load_yaml(content)
    if data is None:
        raise ContextFileError(f"{path}: not a valid {suffix.lstrip('.').upper()} table")

    values: dict[str, str] = {}
    for key, value in data.items():
        key_str = str(key)
        if not is_placeholder_name(key_str):
            raise ContextFileError(f"{path}: invalid placeholder name {key_str!r}")
        values[key_str] = _stringify(key_str, value, path)
    return values


def parse_assignments(assignments: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a mapping.

    Only the first ``=`` separates key and value. Later assignments to the
    same key win.

    Args:
        assignments: Strings of the form ``KEY=VALUE``

    Returns:
        Placeholder name to text mapping

    Raises:
        ValueError: If an assignment has no ``=`` or an invalid key
    """
    values: dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep:
            raise ValueError(f"Expected KEY=VALUE, got {assignment!r}")
        if not is_placeholder_name(key):
            raise ValueError(f"Invalid placeholder name {key!r} in {assignment!r}")
        values[key] = value
    return values
