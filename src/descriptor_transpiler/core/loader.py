"""
Descriptor loading for app.yaml.

Reads the descriptor file, parses the YAML, and validates it into an
AppDescriptor. Syntax and type problems raise ParseError; rule
violations (unknown size tier, empty name) raise ValidationError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .descriptor import AppDescriptor
from .errors import DescriptorIOError, ParseError, ValidationError, make_parse_error

logger = logging.getLogger(__name__)

# pydantic error types that mean "well-formed but breaks a rule"
_SEMANTIC_ERROR_TYPES = frozenset({"value_error", "missing"})


def load_descriptor(path: Path) -> AppDescriptor:
    """
    Load and validate a descriptor file.

    Args:
        path: Path to app.yaml

    Returns:
        Validated AppDescriptor

    Raises:
        DescriptorIOError: If the file cannot be read
        ParseError: If the file is not a well-formed descriptor
        ValidationError: If the descriptor breaks a validation rule
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorIOError(f"failed to read {path}: {e}") from e

    descriptor = parse_descriptor(text, source=path)
    logger.info("Loaded descriptor '%s' from %s", descriptor.name, path)
    return descriptor


def parse_descriptor(text: str, source: Path | None = None) -> AppDescriptor:
    """
    Parse descriptor YAML text.

    Args:
        text: Raw YAML content
        source: Optional file path used in error messages

    Returns:
        Validated AppDescriptor
    """
    data = _load_yaml(text, source)

    if data is None:
        raise ParseError(f"{_label(source)} is empty")
    if not isinstance(data, dict):
        raise ParseError(
            f"{_label(source)} must be a mapping at the top level, got {type(data).__name__}"
        )

    try:
        return AppDescriptor.model_validate(data)
    except PydanticValidationError as e:
        raise _convert_validation_error(e, source) from e


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects mappings with a repeated key."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        self.flatten_mapping(node)
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # unhashable keys are reported by the base constructor
                continue
            if duplicate:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _load_yaml(text: str, source: Path | None) -> Any:
    try:
        return yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark
        message = f"failed to parse {_label(source)}: {e.problem or e}"
        if mark is not None and source is not None:
            raise make_parse_error(message, source, mark.line + 1, mark.column + 1) from e
        raise ParseError(message) from e
    except yaml.YAMLError as e:
        raise ParseError(f"failed to parse {_label(source)}: {e}") from e


def _convert_validation_error(error: PydanticValidationError, source: Path | None) -> Exception:
    """Turn a pydantic error into a ParseError or ValidationError."""
    details = error.errors()
    messages = [_describe(detail) for detail in details]
    message = f"invalid descriptor {_label(source)}: " + "; ".join(messages)

    if all(detail["type"] in _SEMANTIC_ERROR_TYPES for detail in details):
        return ValidationError(message)
    return ParseError(message)


def _describe(detail: Any) -> str:
    location = ".".join(str(part) for part in detail["loc"])
    text = detail["msg"]
    # pydantic prefixes custom errors with "Value error, "
    if detail["type"] == "value_error":
        text = text.removeprefix("Value error, ")
    return f"{location}: {text}" if location else text


def _label(source: Path | None) -> str:
    return str(source) if source is not None else "descriptor"
