"""Tests for the built-in README template."""

from __future__ import annotations

from readmegen.composer import compose_readme
from readmegen.models import ReadmeContext
from readmegen.renderer import placeholder_names, render
from readmegen.templates import DUAL_LICENSE_README_TEMPLATE

LICENSE_SECTION = """## License

Licensed under either of

 * Apache License, Version 2.0
   ([LICENSE-APACHE](LICENSE-APACHE) or http://www.apache.org/licenses/LICENSE-2.0)
 * MIT license
   ([LICENSE-MIT](LICENSE-MIT) or http://opensource.org/licenses/MIT)

at your option.

## Contribution

Unless you explicitly state otherwise, any contribution intentionally submitted
for inclusion in the work by you, as defined in the Apache-2.0 license, shall be
dual licensed as above, without any additional terms or conditions.
"""


class TestDualLicenseTemplate:
    """Test suite for DUAL_LICENSE_README_TEMPLATE."""

    def test_placeholders(self) -> None:
        """Test that the template only needs crate and readme."""
        assert placeholder_names(DUAL_LICENSE_README_TEMPLATE) == ["crate", "readme"]

    def test_license_text_reproduced_verbatim(self) -> None:
        """Test that the license and contribution text survive rendering.

        Tests: render() with the built-in template
        How: Render and compare the tail against the expected legal text
        Why: License text carries legal meaning and must not change
        """
        # Act
        result = render(DUAL_LICENSE_README_TEMPLATE, {"crate": "cargo-readme", "readme": "A tool."})

        # Assert
        assert result.endswith("A tool.\n\n" + LICENSE_SECTION)

    def test_badges_use_crate_name(self) -> None:
        """Test that badge links point at the crate."""
        # Act
        result = render(DUAL_LICENSE_README_TEMPLATE, {"crate": "foo", "readme": "x"})

        # Assert
        assert "https://crates.io/crates/foo" in result
        assert "https://docs.rs/foo/badge.svg" in result
        assert "\n# foo\n" in result
        assert "{{" not in result

    def test_compose_without_license_line(self) -> None:
        """Test that composing with add_license=False yields the trimmed render."""
        # Arrange
        context = ReadmeContext(crate="foo", readme="x", license="MIT OR Apache-2.0")

        # Act
        result = compose_readme(context, DUAL_LICENSE_README_TEMPLATE, add_license=False)

        # Assert
        assert result == render(DUAL_LICENSE_README_TEMPLATE, context.as_mapping()).rstrip("\n")
