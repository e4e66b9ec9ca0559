"""
Chart renderer.

Writes a compiled Deployment to ``<output_dir>/<chart_id>.k8s.yaml``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from ..core.errors import RenderError
from .manifest import Deployment

logger = logging.getLogger(__name__)

MANIFEST_SUFFIX = ".k8s.yaml"


def manifest_path(output_dir: Path, chart_id: str) -> Path:
    """Get the manifest file path for a chart."""
    return output_dir / f"{chart_id}{MANIFEST_SUFFIX}"


def dump_manifest(deployment: Deployment) -> str:
    """Serialize a Deployment to YAML, keeping field order."""
    return yaml.safe_dump(deployment.to_manifest(), sort_keys=False, default_flow_style=False)


def render_chart(deployment: Deployment, output_dir: Path, chart_id: str) -> Path:
    """
    Write a Deployment manifest to the output directory.

    Args:
        deployment: Compiled Deployment
        output_dir: Directory for manifest files (created if missing)
        chart_id: Chart identifier, used as the file name stem

    Returns:
        Path of the written manifest

    Raises:
        RenderError: If the file cannot be written
    """
    path = manifest_path(output_dir, chart_id)
    content = dump_manifest(deployment)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise RenderError(f"failed to write chart manifest {path}: {e}") from e

    logger.info("Wrote chart manifest %s", path)
    return path
