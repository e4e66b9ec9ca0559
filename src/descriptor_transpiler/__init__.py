"""
descriptor-transpiler - app descriptors to Kubernetes and Terraform.

Reads an app.yaml descriptor and generates a Kubernetes Deployment
manifest plus a Terraform module for the attached Postgres database.
"""

from __future__ import annotations

from ._version import get_version
from .core import AppDescriptor, DependencySpec, SizeTier, load_descriptor, parse_descriptor
from .core.errors import (
    DescriptorIOError,
    ParseError,
    RenderError,
    TranspilerError,
    ValidationError,
)
from .runner import TranspileResult, TranspileRunner
from .settings import TranspilerSettings, load_settings

__version__ = get_version()

__all__ = [
    "__version__",
    "AppDescriptor",
    "DependencySpec",
    "SizeTier",
    "load_descriptor",
    "parse_descriptor",
    "TranspileRunner",
    "TranspileResult",
    "TranspilerSettings",
    "load_settings",
    "TranspilerError",
    "ParseError",
    "ValidationError",
    "DescriptorIOError",
    "RenderError",
]
