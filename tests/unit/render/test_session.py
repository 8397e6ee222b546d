"""Unit tests for TreeSession selection and persistence."""

import pytest

from reftree.core.exceptions import NodeNotFoundError
from reftree.render.renderer import FoldState
from reftree.render.session import TreeSession


class TestSelection:
    def test_draw_without_selection_is_empty(self, cycle_index):
        assert TreeSession(cycle_index).draw() == []

    def test_draw_selected_root(self, cycle_index):
        session = TreeSession(cycle_index, max_depth=3)
        session.select("A")

        assert [r.label for r in session.draw()] == ["A", "B", "C"]

    def test_missing_selection_raises(self, cycle_index):
        session = TreeSession(cycle_index)
        session.select("ghost")

        with pytest.raises(NodeNotFoundError):
            session.draw()

    def test_new_selection_resets_fold_state(self, cycle_index):
        session = TreeSession(cycle_index)
        session.select("A")
        session.draw()
        session.set_expanded("0:A", False)

        session.select("C")

        assert len(session.fold_state) == 0

    def test_same_selection_keeps_fold_state(self, cycle_index):
        session = TreeSession(cycle_index)
        session.select("A")
        session.set_expanded("0:A", False)

        session.select("A")

        assert session.fold_state.get("0:A") is False
        assert [r.label for r in session.draw()] == ["A"]

    def test_navigate_changes_root(self, cycle_index):
        session = TreeSession(cycle_index, max_depth=3)
        session.select("A")
        session.navigate("C")

        assert session.selected_id == "C"
        assert session.draw()[0].label == "C"


class TestDepth:
    @pytest.mark.parametrize("requested,expected", [(0, 1), (1, 1), (7, 7), (10, 10), (42, 10)])
    def test_depth_is_clamped(self, cycle_index, requested, expected):
        session = TreeSession(cycle_index)
        session.max_depth = requested
        assert session.max_depth == expected

    def test_default_depth(self, cycle_index):
        assert TreeSession(cycle_index).max_depth == 5


class TestPersistence:
    def test_roundtrip(self, cycle_index):
        session = TreeSession(cycle_index, max_depth=4, fold_state=FoldState({"1:A > C": False}))
        session.selected_id = "A"

        restored = TreeSession.from_dict(cycle_index, session.to_dict())

        assert restored.selected_id == "A"
        assert restored.max_depth == 4
        assert restored.fold_state.get("1:A > C") is False
        assert restored.draw() == session.draw()

    def test_from_empty_dict(self, cycle_index):
        restored = TreeSession.from_dict(cycle_index, {})
        assert restored.selected_id is None
        assert restored.max_depth == 5
        assert len(restored.fold_state) == 0
