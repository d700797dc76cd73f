"""README composition.

Builds the finished README from a ``ReadmeContext``. With a template, the
template decides the layout and the title or license line is only added when
the template does not place it itself. Without a template, the README body
gets a ``# crate`` title and a ``License: ...`` trailer.
"""

from __future__ import annotations

from readmegen.errors import TemplateError
from readmegen.models import ReadmeContext
from readmegen.renderer import Template


def prepend_title(text: str, crate: str) -> str:
    """Prefix text with a top-level ``# crate`` heading.

    Args:
        text: README text
        crate: Package name

    Returns:
        Text with the heading and a blank line in front.
    """
    return f"# {crate}\n\n{text}"


def append_license(text: str, license_name: str) -> str:
    """Append a ``License: ...`` line after a blank line.

    Args:
        text: README text
        license_name: License expression, e.g. ``MIT OR Apache-2.0``

    Returns:
        Text with the license line at the end.
    """
    return f"{text}\n\nLicense: {license_name}"


def compose_readme(
    context: ReadmeContext, template: str | Template | None = None, *, add_title: bool = True, add_license: bool = True
) -> str:
    """Compose a README from a context and an optional template.

    Args:
        context: Values for the README
        template: Template text or parsed template; None uses the bare layout
        add_title: Prepend ``# crate`` unless the template contains ``{{crate}}``
        add_license: Append ``License: ...`` when a license is set, unless the
            template contains ``{{license}}``

    Returns:
        The README text. Trailing newlines of the template are dropped.

    Raises:
        TemplateError: If the template does not contain ``{{readme}}``
        MalformedTokenError: If the template contains a malformed token
        MissingKeyError: If the template uses a name the context lacks, such as
            ``{{license}}`` when no license is set
    """
    if template is None:
        result = context.readme
        if add_title:
            result = prepend_title(result, context.crate)
        if add_license and context.license is not None:
            result = append_license(result, context.license)
        return result

    source = template.source if isinstance(template, Template) else template
    parsed = Template(source.rstrip("\r\n"))
    names = parsed.names

    if "readme" not in names:
        raise TemplateError("Missing `{{readme}}` in template")

    result = parsed.render(context.as_mapping())

    if add_title and "crate" not in names:
        result = prepend_title(result, context.crate)
    if add_license and "license" not in names and context.license is not None:
        result = append_license(result, context.license)
    return result
