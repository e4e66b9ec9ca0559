"""
Error types for descriptor loading, validation, and artifact rendering.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TranspilerError(Exception):
    """Base exception for all transpiler errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(TranspilerError):
    """
    Raised when input does not have the expected structure.

    Examples:
    - Invalid YAML or TOML syntax
    - Descriptor document that is not a mapping
    - Field of the wrong type (e.g. a list where a mapping is expected)
    """

    pass


class ValidationError(TranspilerError):
    """
    Raised when a well-formed input breaks a semantic rule.

    Examples:
    - Unknown size tier
    - Empty application name or image tag
    - Database size without a machine class
    - Postgres version outside the allowed set
    - Database query on a descriptor without a database dependency
    """

    pass


class DescriptorIOError(TranspilerError):
    """Raised when the descriptor file cannot be read."""

    pass


class RenderError(TranspilerError):
    """Raised when a generated artifact cannot be written."""

    pass


@dataclass
class ErrorContext:
    """Position of an error in an input file (1-indexed line and column)."""

    file: Path
    line: int
    column: int

    def format(self) -> str:
        """Format as "app.yaml:10:5"."""
        return f"{self.file}:{self.line}:{self.column}"


def make_parse_error(message: str, file: Path, line: int, column: int) -> ParseError:
    """Create a ParseError located at a file position."""
    return ParseError(message, ErrorContext(file=file, line=line, column=column))
