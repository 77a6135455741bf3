import numpy as np
import pytest

from concavehull.model.editor import HullEditor, hit_test_ring, remove_ring_vertex
from concavehull.model.errors import RingEditError
from concavehull.model.geometry import CoordinateMapper, DisplayBounds


@pytest.fixture
def pentagon_ring():
    yield np.array([[0.0, 0.0], [4.0, 0.0], [5.0, 3.0], [2.0, 5.0], [-1.0, 3.0], [0.0, 0.0]])


@pytest.fixture
def editor(square_ring):
    ed = HullEditor()
    ed.set_ring(square_ring)
    yield ed


# --- hit testing ---

def test_hit_vertex(square_ring):
    assert hit_test_ring(square_ring, (1.02, 0.98), 0.1) == 2


def test_hit_edge_returns_start_index(square_ring):
    assert hit_test_ring(square_ring, (0.5, 0.03), 0.1) == 0
    assert hit_test_ring(square_ring, (1.04, 0.5), 0.1) == 1


def test_hit_vertex_beats_edge(square_ring):
    # within radius of vertex 1 and of edge 0 -> 1; the vertex wins
    assert hit_test_ring(square_ring, (0.95, 0.0), 0.1) == 1


def test_hit_first_vertex_not_its_duplicate(square_ring):
    assert hit_test_ring(square_ring, (0.0, 0.0), 0.1) == 0


def test_miss(square_ring):
    assert hit_test_ring(square_ring, (0.5, 0.5), 0.1) is None


def test_hit_too_short_ring():
    assert hit_test_ring(np.array([[0.0, 0.0], [1.0, 1.0]]), (0.0, 0.0), 1.0) is None


def test_editor_hit_test_in_display_space(editor):
    mapper = CoordinateMapper(DisplayBounds(0.0, 0.0, 1.0, 1.0), 100, 100)
    # data (1, 1) -> display (100, 0)
    assert editor.hit_test((98.0, 3.0), 5.0, mapper) == 2
    assert editor.hit_test((50.0, 50.0), 5.0, mapper) is None


def test_editor_hit_test_without_ring():
    assert HullEditor().hit_test((0.0, 0.0)) is None


# --- vertex removal ---

def test_remove_interior_vertex(pentagon_ring):
    new_ring = remove_ring_vertex(pentagon_ring, 2)
    np.testing.assert_array_equal(
        new_ring, [[0.0, 0.0], [4.0, 0.0], [2.0, 5.0], [-1.0, 3.0], [0.0, 0.0]]
    )


@pytest.mark.parametrize("index", [0, 5])
def test_remove_start_vertex_recloses_on_second(pentagon_ring, index):
    new_ring = remove_ring_vertex(pentagon_ring, index)
    np.testing.assert_array_equal(
        new_ring, [[4.0, 0.0], [5.0, 3.0], [2.0, 5.0], [-1.0, 3.0], [4.0, 0.0]]
    )


def test_removal_does_not_touch_input(pentagon_ring):
    before = pentagon_ring.copy()
    remove_ring_vertex(pentagon_ring, 3)
    np.testing.assert_array_equal(pentagon_ring, before)


def test_minimum_vertex_guard(triangle_ring):
    with pytest.raises(RingEditError):
        remove_ring_vertex(triangle_ring, 1)


@pytest.mark.parametrize("index", [-1, 6, 100])
def test_remove_out_of_range(pentagon_ring, index):
    with pytest.raises(RingEditError):
        remove_ring_vertex(pentagon_ring, index)


def test_remove_rejected_when_too_few_unique_vertices_remain():
    # five points, but two of the interior ones coincide
    ring = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
    with pytest.raises(RingEditError):
        remove_ring_vertex(ring, 3)


def test_editor_remove_vertex_replaces_ring(editor):
    editor.highlight(2)
    new_ring = editor.remove_vertex(2)

    assert len(new_ring) == 4
    assert editor.ring is new_ring
    assert editor.highlighted_index is None
    assert editor.vertex_count == 3


def test_editor_guard_keeps_ring(triangle_ring):
    editor = HullEditor()
    editor.set_ring(triangle_ring)
    before = editor.ring

    with pytest.raises(RingEditError):
        editor.remove_vertex(1)
    assert editor.ring is before


def test_editor_remove_without_ring():
    with pytest.raises(RingEditError):
        HullEditor().remove_vertex(0)


# --- ring state ---

def test_set_ring_rejects_open_ring():
    with pytest.raises(RingEditError):
        HullEditor().set_ring(np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]))


def test_set_ring_rejects_short_ring():
    with pytest.raises(RingEditError):
        HullEditor().set_ring(np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 0.0]]))


def test_set_ring_none_clears(editor):
    editor.set_ring(None)
    assert editor.ring is None
    assert editor.vertex_count == 0


def test_ring_is_read_only(editor):
    with pytest.raises(ValueError):
        editor.ring[0, 0] = 3.0


def test_ring_listener(square_ring):
    seen = []
    editor = HullEditor()
    editor.add_ring_listener(seen.append)
    editor.set_ring(square_ring)
    editor.remove_vertex(1)

    assert len(seen) == 2
    assert len(seen[-1]) == 4


# --- highlighting ---

def test_highlight_notifies_on_change_only(editor):
    seen = []
    editor.add_highlight_listener(seen.append)
    editor.highlight(1)
    editor.highlight(1)
    editor.clear_highlight()
    editor.clear_highlight()

    assert seen == [1, None]


def test_highlight_out_of_range(editor):
    with pytest.raises(IndexError):
        editor.highlight(5)


def test_highlighted_edges(editor):
    editor.highlight(2)
    assert editor.highlighted_edges() == {1, 2}


def test_highlighted_edges_first_vertex(editor):
    # the edge into vertex 0 is the one closing the ring, 3 -> 4
    editor.highlight(0)
    assert editor.highlighted_edges() == {0, 3}


def test_set_ring_resets_highlight(editor, triangle_ring):
    editor.highlight(1)
    editor.set_ring(triangle_ring)
    assert editor.highlighted_index is None
    assert editor.highlighted_edges() == set()
