"""Exception types for readmegen."""

from __future__ import annotations


class TemplateError(Exception):
    """Base exception for template problems."""

    pass


class MissingKeyError(TemplateError, KeyError):
    """A placeholder in the template has no value in the context.

    Attributes:
        keys: Every missing placeholder name, in order of first appearance
    """

    def __init__(self, keys: list[str]) -> None:
        """Initialize with the missing placeholder names.

        Args:
            keys: Missing placeholder names (at least one)
        """
        self.keys = list(keys)
        super().__init__(self.keys)

    @property
    def key(self) -> str:
        """First missing placeholder name."""
        return self.keys[0]

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the args
        return f"Missing value for placeholder(s): {', '.join(self.keys)}"


class MalformedTokenError(TemplateError, ValueError):
    """A ``{{`` opened a token that is unterminated or has an invalid name.

    Attributes:
        token: Offending token text (truncated for unterminated tokens)
        offset: Index of the opening ``{{`` in the template
        line: 1-based line of the opening ``{{``
        column: 1-based column of the opening ``{{``
        reason: Short description of the problem
    """

    def __init__(self, token: str, offset: int, line: int, column: int, reason: str) -> None:
        """Initialize with the location of the bad token.

        Args:
            token: Offending token text
            offset: Index of the opening delimiter
            line: 1-based line number
            column: 1-based column number
            reason: Short description of the problem
        """
        self.token = token
        self.offset = offset
        self.line = line
        self.column = column
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"Malformed placeholder {self.token!r} at line {self.line}, column {self.column}: {self.reason}"


class ContextFileError(ValueError):
    """A context file could not be read or does not hold a flat table of values."""

    pass
