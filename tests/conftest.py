"""Pytest configuration for readmegen tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from readmegen.models import ReadmeContext

LICENSE_BOILERPLATE = (
    "## License\n"
    "\n"
    "Licensed under either of [Apache-2.0](LICENSE-APACHE) or [MIT](LICENSE-MIT) at your option.\n"
)


@pytest.fixture
def readme_context() -> ReadmeContext:
    """Provide a complete README context.

    Returns:
        Context with crate, readme body and license set
    """
    return ReadmeContext(
        crate="cargo-readme",
        readme="A tool.\n\n## Usage\n\nRun `cargo readme`.",
        license="MIT OR Apache-2.0",
    )


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    """Provide a README template file using crate and readme placeholders.

    Args:
        tmp_path: pytest temporary directory

    Returns:
        Path to the template file
    """
    path = tmp_path / "README.tpl"
    _ = path.write_text("# {{crate}}\n\n{{readme}}\n\n" + LICENSE_BOILERPLATE, encoding="utf-8")
    return path


@pytest.fixture
def readme_file(tmp_path: Path) -> Path:
    """Provide a Markdown body file with trailing newlines.

    Args:
        tmp_path: pytest temporary directory

    Returns:
        Path to the Markdown file
    """
    path = tmp_path / "intro.md"
    _ = path.write_text("A tool.\n\n", encoding="utf-8")
    return path


@pytest.fixture
def license_boilerplate() -> str:
    """Provide the license section written by the template_file fixture.

    Returns:
        License section text
    """
    return LICENSE_BOILERPLATE
