"""Public API: lay out, render and write dependency-tree diagrams."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from deptree.config import TreeConfig
from deptree.errors import DependencyTreeError
from deptree.graph import DependencyRecord
from deptree.layout import full_layout
from deptree.layout.types import LayoutResult
from deptree.renderers.base import Renderer
from deptree.renderers.svg import SvgRenderer

logger = logging.getLogger(__name__)

Records = Iterable[DependencyRecord | Mapping[str, Any]]

SVG_EXTENSION = ".svg"


def layout_dependency_tree(root_namespace: str, records: Records, config: TreeConfig | None = None) -> LayoutResult:
    """Lay out the dependency tree of ``root_namespace`` without drawing it."""
    return full_layout(root_namespace, records, config)


def render_svg(
    root_namespace: str,
    records: Records,
    config: TreeConfig | None = None,
    renderer: Renderer | None = None,
) -> str:
    """Lay out and draw a dependency tree, returning the SVG document."""
    result = full_layout(root_namespace, records, config)
    return (renderer or SvgRenderer()).render(result)


def safe_filename(namespace: str) -> str:
    """A filesystem-safe file stem for a namespace."""
    name = re.sub(r"[^a-zA-Z0-9.-]", "_", namespace)
    name = re.sub(r"_+", "_", name)
    return name.strip("_")


def write_dependency_tree_svg(
    root_namespace: str,
    records: Records,
    output_dir: Path,
    config: TreeConfig | None = None,
) -> str:
    """Render the tree for ``root_namespace`` into ``output_dir`` and return the file name.

    Failures are logged with the namespace and re-raised.
    """
    filename = safe_filename(root_namespace) + SVG_EXTENSION
    try:
        svg = render_svg(root_namespace, records, config)
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / filename).write_text(svg, encoding="utf-8")
    except (DependencyTreeError, OSError) as e:
        logger.warning(f"Failed to generate dependency tree for {root_namespace}: {e}")
        raise
    return filename


def write_dependency_tree_svgs(
    trees: Iterable[tuple[str, Records]],
    output_dir: Path,
    config: TreeConfig | None = None,
) -> list[str]:
    """Write one diagram per ``(root_namespace, records)`` pair.

    A diagram that fails is skipped; the rest of the batch still gets written.
    Returns the file names written, in input order.
    """
    written: list[str] = []
    for root_namespace, records in trees:
        try:
            written.append(write_dependency_tree_svg(root_namespace, records, output_dir, config))
        except (DependencyTreeError, OSError):
            logger.info(f"Skipping dependency tree diagram for {root_namespace}")
    return written
