"""End-to-end tests: dependency records → SVG text and files on disk."""

from pathlib import Path

import pytest

from deptree import api
from deptree.api import render_svg, safe_filename, write_dependency_tree_svg, write_dependency_tree_svgs
from deptree.config import TreeConfig
from deptree.errors import UnrenderableSizeError
from deptree.graph import DependencyRecord
from deptree.layout import full_layout
from deptree.renderers import SvgRenderer

ROOT = "com.example.Root"


def rec(namespace: str, level: int, *references: str) -> DependencyRecord:
    return DependencyRecord(namespace=namespace, level=level, references=tuple(references))


def diamond() -> list[DependencyRecord]:
    return [
        rec(ROOT, 0, "com.example.A", "com.example.B"),
        rec("com.example.A", 1, "com.example.Shared"),
        rec("com.example.B", 1, "com.example.Shared"),
        rec("com.example.Shared", 2),
    ]


class TestRenderSvg:
    def test_document_shape(self):
        """One box per distinct namespace and one line per edge."""
        svg = render_svg(ROOT, diamond())
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert svg.count("<rect x=") == 4
        assert svg.count("<line ") == 4
        assert "Dependency tree: com.example.Root" in svg

    def test_shared_namespace_drawn_once(self):
        """The diamond's shared namespace gets a single label."""
        svg = render_svg(ROOT, diamond())
        assert svg.count(">com.example.Shared</text>") == 1

    def test_root_styled(self):
        """The root box uses the root border colour and a bold label."""
        svg = render_svg(ROOT, diamond())
        assert svg.count('stroke="#2196f3"') == 1
        assert 'font-weight="bold"' in svg

    def test_level_indicators(self):
        """Each box shows its level."""
        svg = render_svg(ROOT, diamond())
        assert ">L0</text>" in svg
        assert ">L2</text>" in svg

    def test_labels_escaped(self):
        """Markup characters in namespaces are escaped."""
        svg = render_svg("a<b>", [rec("a<b>", 0)])
        assert "a&lt;b&gt;" in svg
        assert "a<b>" not in svg

    def test_canvas_size_matches_layout(self):
        """The SVG viewport is the computed canvas."""
        result = full_layout(ROOT, diamond())
        svg = SvgRenderer().render(result)
        assert f'width="{result.width}" height="{result.height}"' in svg

    def test_offcanvas_boxes_not_drawn(self):
        """Boxes past the maximum canvas are left out."""
        children = [f"C{i}" for i in range(40)]
        records = [rec("Root", 0, *children)] + [rec(c, 1) for c in children]
        svg = render_svg("Root", records)
        assert svg.count("<rect x=") < 41

    def test_title_above_root_normal(self):
        """Normal layout: the title sits at its usual baseline, above the root row."""
        result = full_layout(ROOT, diamond())
        svg = SvgRenderer().render(result)
        assert 'y="25" text-anchor="middle"' in svg
        assert result.root.y == 40

    def test_title_above_root_compact(self):
        """Compact layout's narrower padding pulls the title up so it clears the root box."""
        result = full_layout(ROOT, diamond(), TreeConfig(complex_tree_threshold=0))
        svg = SvgRenderer().render(result)
        assert result.root.y == 20
        assert 'y="16" text-anchor="middle"' in svg


class TestSafeFilename:
    def test_plain_namespace(self):
        """Dots and dashes survive."""
        assert safe_filename("com.example-app.Root") == "com.example-app.Root"

    def test_special_characters(self):
        """Other characters become single underscores, trimmed at the ends."""
        assert safe_filename("com.example.Outer$Inner") == "com.example.Outer_Inner"
        assert safe_filename("  a//b  ") == "a_b"


class TestWriteSvg:
    def test_writes_file(self, tmp_path: Path):
        """The file lands in the output directory and its name is returned."""
        name = write_dependency_tree_svg(ROOT, diamond(), tmp_path)
        assert name == "com.example.Root.svg"
        assert (tmp_path / name).read_text(encoding="utf-8").startswith("<svg")

    def test_creates_output_dir(self, tmp_path: Path):
        """Missing output directories are created."""
        out = tmp_path / "nested" / "dir"
        write_dependency_tree_svg(ROOT, diamond(), out)
        assert (out / "com.example.Root.svg").exists()

    def test_failure_logged_and_raised(self, tmp_path: Path, caplog):
        """An unrenderable canvas is logged with the namespace and re-raised."""
        config = TreeConfig(max_canvas_width=0, min_canvas_width=0)
        with pytest.raises(UnrenderableSizeError):
            write_dependency_tree_svg(ROOT, diamond(), tmp_path, config)
        assert any(ROOT in r.getMessage() for r in caplog.records)
        assert list(tmp_path.iterdir()) == []


class TestWriteBatch:
    def test_failed_diagram_skipped(self, tmp_path: Path, monkeypatch):
        """One failing diagram does not stop the rest of the batch."""
        real_render = api.render_svg

        def flaky_render(root_namespace, records, config=None, renderer=None):
            if root_namespace == "Bad":
                raise UnrenderableSizeError(0, 0, root_namespace)
            return real_render(root_namespace, records, config, renderer)

        monkeypatch.setattr(api, "render_svg", flaky_render)
        trees = [
            ("Good1", [rec("Good1", 0)]),
            ("Bad", [rec("Bad", 0)]),
            ("Good2", [rec("Good2", 0)]),
        ]
        written = write_dependency_tree_svgs(trees, tmp_path)
        assert written == ["Good1.svg", "Good2.svg"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["Good1.svg", "Good2.svg"]
