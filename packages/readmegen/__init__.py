"""readmegen - Render README files from placeholder templates.

This package substitutes ``{{name}}`` placeholders in README templates with
package metadata and documentation text, and composes the finished README.
"""

from __future__ import annotations

__version__ = "0.1.0"

from readmegen.composer import compose_readme
from readmegen.errors import ContextFileError, MalformedTokenError, MissingKeyError, TemplateError
from readmegen.models import ReadmeContext
from readmegen.renderer import Template, parse_template, placeholder_names, render

# Export main CLI app for entry point
from readmegen.cli import app

__all__ = [
    "ContextFileError",
    "MalformedTokenError",
    "MissingKeyError",
    "ReadmeContext",
    "Template",
    "TemplateError",
    "__version__",
    "app",
    "compose_readme",
    "parse_template",
    "placeholder_names",
    "render",
]
