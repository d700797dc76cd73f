"""Placeholder template rendering.

Templates are plain text with ``{{name}}`` tokens. A name is one or more ASCII
letters, digits or underscores, with no whitespace inside the delimiters. The
delimiters have no escape form, so any ``{{`` in a template opens a token.

Rendering is a single pass: replacement text is inserted verbatim and is never
scanned for further tokens, even when it contains ``{{...}}`` itself.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from readmegen.errors import MalformedTokenError, MissingKeyError, TemplateError

OPEN_DELIMITER = "{{"
CLOSE_DELIMITER = "}}"

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")

# Longest token excerpt quoted in errors for unterminated tokens
_EXCERPT_LENGTH = 24


@dataclass(frozen=True)
class LiteralText:
    """Literal run of template text, reproduced unchanged."""

    text: str


@dataclass(frozen=True)
class Placeholder:
    """A ``{{name}}`` token and the offset of its opening delimiter."""

    name: str
    offset: int

    @property
    def token(self) -> str:
        """Token text as written in the template."""
        return f"{OPEN_DELIMITER}{self.name}{CLOSE_DELIMITER}"


Segment = LiteralText | Placeholder


def is_placeholder_name(text: str) -> bool:
    """Check whether text is a valid placeholder name.

    Args:
        text: Candidate name

    Returns:
        True if text is non-empty and only letters, digits or underscores.
    """
    return _NAME_PATTERN.fullmatch(text) is not None


def _malformed(template: str, offset: int, token: str, reason: str) -> MalformedTokenError:
    line = template.count("\n", 0, offset) + 1
    column = offset - (template.rfind("\n", 0, offset) + 1) + 1
    return MalformedTokenError(token, offset, line, column, reason)


def parse_template(template: str) -> tuple[Segment, ...]:
    """Split a template into literal and placeholder segments.

    Args:
        template: Template text

    Returns:
        Segments in template order. Adjacent literal text is never split.

    Raises:
        MalformedTokenError: If a ``{{`` is unterminated or encloses an invalid name
    """
    segments: list[Segment] = []
    position = 0

    while (start := template.find(OPEN_DELIMITER, position)) != -1:
        name_start = start + len(OPEN_DELIMITER)
        end = template.find(CLOSE_DELIMITER, name_start)
        if end == -1:
            excerpt = template[start : start + _EXCERPT_LENGTH]
            raise _malformed(template, start, excerpt, f"no closing {CLOSE_DELIMITER!r} before end of template")

        name = template[name_start:end]
        if not is_placeholder_name(name):
            token = template[start : end + len(CLOSE_DELIMITER)]
            reason = "empty placeholder name" if not name else "name may only contain letters, digits and underscores"
            raise _malformed(template, start, token, reason)

        if start > position:
            segments.append(LiteralText(template[position:start]))
        segments.append(Placeholder(name, start))
        position = end + len(CLOSE_DELIMITER)

    if position < len(template):
        segments.append(LiteralText(template[position:]))
    return tuple(segments)


def _unique_names(segments: tuple[Segment, ...]) -> list[str]:
    return list(dict.fromkeys(seg.name for seg in segments if isinstance(seg, Placeholder)))


def _substitute(segments: tuple[Segment, ...], context: Mapping[str, str]) -> str:
    missing = [name for name in _unique_names(segments) if name not in context]
    if missing:
        raise MissingKeyError(missing)

    return "".join(seg.text if isinstance(seg, LiteralText) else context[seg.name] for seg in segments)


def placeholder_names(template: str) -> list[str]:
    """List the placeholder names used by a template.

    Args:
        template: Template text

    Returns:
        Unique names in order of first appearance.

    Raises:
        MalformedTokenError: If the template contains a malformed token
    """
    return _unique_names(parse_template(template))


def render(template: str, context: Mapping[str, str]) -> str:
    """Substitute every ``{{name}}`` token with ``context[name]``.

    The whole template is parsed before any lookup, so a malformed token is
    reported even when names are also missing. Keys in context that the
    template does not use are ignored.

    Args:
        template: Template text
        context: Replacement text for each placeholder name

    Returns:
        The rendered text. Literal text is preserved exactly.

    Raises:
        MalformedTokenError: If the template contains a malformed token
        MissingKeyError: If any placeholder name is absent from context
    """
    return _substitute(parse_template(template), context)


def read_utf8(path: Path) -> str:
    """Read a UTF-8 text file without newline translation.

    Args:
        path: File path

    Returns:
        File contents with ``\\r\\n`` and ``\\r`` line endings intact.

    Raises:
        TemplateError: If the file is not valid UTF-8
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"{path} is not valid UTF-8 (byte {e.start}: {e.reason})"
        raise TemplateError(msg) from e


@dataclass(frozen=True)
class Template:
    """A parsed template that can be rendered repeatedly.

    Attributes:
        source: Original template text
        segments: Parsed literal and placeholder segments
    """

    source: str
    segments: tuple[Segment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", parse_template(self.source))

    @classmethod
    def from_path(cls, path: Path) -> Template:
        """Load a template from a UTF-8 text file.

        Line endings are kept exactly as stored.

        Args:
            path: Template file path

        Returns:
            Parsed template.

        Raises:
            MalformedTokenError: If the file contains a malformed token
            TemplateError: If the file is not valid UTF-8
        """
        return cls(read_utf8(path))

    @property
    def names(self) -> list[str]:
        """Unique placeholder names in order of first appearance."""
        return _unique_names(self.segments)

    @property
    def placeholders(self) -> list[Placeholder]:
        """Every placeholder occurrence in template order."""
        return [seg for seg in self.segments if isinstance(seg, Placeholder)]

    def render(self, context: Mapping[str, str]) -> str:
        """Render the template against a context.

        Args:
            context: Replacement text for each placeholder name

        Returns:
            The rendered text.

        Raises:
            MissingKeyError: If any placeholder name is absent from context
        """
        return _substitute(self.segments, context)
