"""Unit tests for the render backends."""

from rich.console import Console

from reftree.core.types import RenderRecord
from reftree.render.backends import format_label, to_ascii_lines, to_payload, to_rich_tree
from reftree.render.renderer import TreeRenderer


def _record(depth, label, **kwargs) -> RenderRecord:
    return RenderRecord(node_id=label, path_key=f"{depth}:{label}", depth=depth, label=label, **kwargs)


def _render_text(tree) -> str:
    console = Console(width=80, record=True, color_system=None)
    console.print(tree)
    return console.export_text()


class TestFormatLabel:
    def test_plain_label(self):
        record = _record(0, "Rock.mat", referencer_count=2, expandable=True, expanded=True,
                         is_included=True)
        assert format_label(record, markup=False) == "▼ ● Rock.mat (2)"

    def test_collapsed_and_excluded(self):
        record = _record(1, "Old.png", referencer_count=1, expandable=True)
        assert format_label(record, markup=False) == "▶ ○ Old.png (1)"

    def test_leaf_has_no_marker_or_count(self):
        assert format_label(_record(2, "leaf"), markup=False) == "○ leaf"

    def test_markup_escapes_label(self):
        label = format_label(_record(0, "[weird]"))
        assert "\\[weird]" in label


class TestAsciiLines:
    def test_indentation_and_connector(self, cycle_index):
        records = TreeRenderer(cycle_index).render(cycle_index.lookup("A"), 3)

        assert to_ascii_lines(records) == [
            "▼ ○ A (2)",
            "  └─ ○ B",
            "  └─ ▼ ○ C (1)",
        ]


class TestRichTree:
    def test_nesting_follows_depth(self):
        records = [_record(0, "root"), _record(1, "a"), _record(2, "a1"), _record(1, "b")]
        tree = to_rich_tree(records)

        assert [child.label for child in tree.children] == [
            format_label(records[1]), format_label(records[3]),
        ]
        assert len(tree.children[0].children) == 1
        assert tree.children[1].children == []

    def test_title_wraps_root(self):
        records = [_record(0, "root"), _record(1, "a")]
        tree = to_rich_tree(records, title="Referenced by")

        assert tree.label == "Referenced by"
        assert len(tree.children) == 1
        assert len(tree.children[0].children) == 1

    def test_empty_records(self):
        assert "Nothing selected" in _render_text(to_rich_tree([]))

    def test_prints_labels(self, cycle_index):
        records = TreeRenderer(cycle_index).render(cycle_index.lookup("A"), 3)
        text = _render_text(to_rich_tree(records))

        for label in ("A", "B", "C"):
            assert label in text


class TestPayload:
    def test_payload_is_plain_dicts(self, cycle_index):
        records = TreeRenderer(cycle_index).render(cycle_index.lookup("A"), 3)
        payload = to_payload(records)

        assert payload[0]["node_id"] == "A"
        assert payload[0]["path_key"] == "0:A"
        assert payload[2]["expandable"] is True
        assert set(payload[1]) >= {"depth", "label", "referencer_count", "expanded"}
