"""deptree: hierarchical dependency-tree layout for class/module graphs."""

from deptree.api import (
    layout_dependency_tree,
    render_svg,
    safe_filename,
    write_dependency_tree_svg,
    write_dependency_tree_svgs,
)
from deptree.config import SizeMode, SizeProfile, TreeConfig, load_config
from deptree.errors import ConfigError, DependencyTreeError, UnrenderableSizeError
from deptree.graph import DependencyRecord, GraphIndex
from deptree.hierarchy import HierarchyNode, hierarchize

__all__ = [
    "ConfigError",
    "DependencyRecord",
    "DependencyTreeError",
    "GraphIndex",
    "HierarchyNode",
    "SizeMode",
    "SizeProfile",
    "TreeConfig",
    "UnrenderableSizeError",
    "hierarchize",
    "layout_dependency_tree",
    "load_config",
    "render_svg",
    "safe_filename",
    "write_dependency_tree_svg",
    "write_dependency_tree_svgs",
]
