"""
Core descriptor model: errors, size tiers, and descriptor loading.
"""

from .descriptor import AppDescriptor, DatabaseRequest, DependencySpec
from .errors import (
    DescriptorIOError,
    ErrorContext,
    ParseError,
    RenderError,
    TranspilerError,
    ValidationError,
)
from .loader import load_descriptor, parse_descriptor
from .sizes import (
    DATABASE_MACHINE_CLASSES,
    SIZE_RESOURCES,
    VALID_SIZES,
    ResourceSpec,
    SizeTier,
    resolve_database_class,
    resolve_resources,
)

__all__ = [
    # Descriptor
    "AppDescriptor",
    "DependencySpec",
    "DatabaseRequest",
    "load_descriptor",
    "parse_descriptor",
    # Sizes
    "SizeTier",
    "ResourceSpec",
    "SIZE_RESOURCES",
    "DATABASE_MACHINE_CLASSES",
    "VALID_SIZES",
    "resolve_resources",
    "resolve_database_class",
    # Errors
    "TranspilerError",
    "ParseError",
    "ValidationError",
    "DescriptorIOError",
    "RenderError",
    "ErrorContext",
]
