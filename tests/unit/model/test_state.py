import numpy as np
import pytest

from concavehull.model.errors import NoPointsError
from concavehull.model.hull import HullMode, HullParams, HullResult
from concavehull.model.io import FileFormat, LoadResult
from concavehull.model.geometry import as_points
from concavehull.model.state import ProjectState


@pytest.fixture
def loaded_state():
    state = ProjectState()
    result = LoadResult(points=as_points([[0, 0], [1, 0], [1, 1], [0, 1]]), header_x="X", header_y="Y")
    state.apply_load(result, "points.csv", FileFormat(delimiter=";", decimal_separator=",", has_header=True))
    yield state


def test_initial_state():
    state = ProjectState()
    assert not state.has_points
    assert not state.can_compute
    assert not state.can_export
    assert state.points.shape == (0, 2)
    assert state.ring is None


def test_apply_load(loaded_state):
    assert loaded_state.has_points
    assert loaded_state.can_compute
    assert not loaded_state.can_export
    assert (loaded_state.header_x, loaded_state.header_y) == ("X", "Y")
    assert loaded_state.file_format.decimal_separator == ","


def test_apply_hull_enables_export(loaded_state, square_ring):
    params = HullParams(HullMode.MAX_EDGE_LENGTH, 2.0)
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), params)

    assert loaded_state.can_export
    np.testing.assert_array_equal(loaded_state.ring, square_ring)
    assert loaded_state.hull_params == params
    assert loaded_state.hull_geometry_type == "Polygon"


def test_non_polygon_hull_clears_ring(loaded_state, square_ring):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams())
    loaded_state.apply_hull(HullResult("LineString", None), HullParams())

    assert loaded_state.ring is None
    assert not loaded_state.can_export
    assert loaded_state.hull_geometry_type == "LineString"


def test_new_load_drops_hull(loaded_state, square_ring):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams())
    loaded_state.apply_load(LoadResult(points=as_points([[5, 5]])), "other.csv", FileFormat())

    assert loaded_state.ring is None
    assert loaded_state.hull_geometry_type is None
    assert loaded_state.source_path == "other.csv"
    assert loaded_state.header_x == ""


def test_reset(loaded_state, square_ring):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams(HullMode.LENGTH_RATIO, 0.7))
    loaded_state.reset()

    assert loaded_state.source_path is None
    assert not loaded_state.has_points
    assert loaded_state.ring is None
    assert loaded_state.hull_params == HullParams()
    assert loaded_state.file_format == FileFormat()


def _assert_unchanged(state, square_ring):
    np.testing.assert_array_equal(state.points, [[0, 0], [1, 0], [1, 1], [0, 1]])
    np.testing.assert_array_equal(state.ring, square_ring)
    assert state.source_path == "points.csv"
    assert (state.header_x, state.header_y) == ("X", "Y")
    assert state.file_format.decimal_separator == ","
    assert state.can_export


def test_load_installs_points(write_file):
    state = ProjectState()
    path = write_file("1;2\n3;4\n5;6\n")
    result = state.load(path, FileFormat(delimiter=";", decimal_separator="."))

    assert result.count == 3
    assert state.source_path == path
    np.testing.assert_array_equal(state.points, [[1, 2], [3, 4], [5, 6]])


def test_load_without_any_coordinate_keeps_state(loaded_state, square_ring, write_file):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams())
    path = write_file("a;b\nc;d\n", name="garbage.csv")

    with pytest.raises(NoPointsError) as excinfo:
        loaded_state.load(path, FileFormat(delimiter=";", decimal_separator="."))

    assert [s.row for s in excinfo.value.skipped] == [1, 2]
    _assert_unchanged(loaded_state, square_ring)


def test_load_of_missing_file_keeps_state(loaded_state, square_ring, tmp_path):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams())

    with pytest.raises(FileNotFoundError):
        loaded_state.load(str(tmp_path / "missing.csv"), FileFormat(delimiter=";", decimal_separator="."))

    _assert_unchanged(loaded_state, square_ring)


def test_apply_empty_load_result_is_refused(loaded_state, square_ring):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams())

    with pytest.raises(NoPointsError):
        loaded_state.apply_load(LoadResult(points=as_points(np.empty((0, 2)))), "empty.csv", FileFormat())

    _assert_unchanged(loaded_state, square_ring)


def test_computing_blocks_edit_and_export(loaded_state, square_ring):
    loaded_state.apply_hull(HullResult("Polygon", as_points(square_ring)), HullParams())
    loaded_state.computing = True

    assert not loaded_state.can_edit
    assert not loaded_state.can_export
    assert not loaded_state.can_compute

    loaded_state.computing = False
    assert loaded_state.can_edit
    assert loaded_state.can_export
    assert loaded_state.can_compute


def test_reset_clears_computing(loaded_state):
    loaded_state.computing = True
    loaded_state.reset()
    assert not loaded_state.computing
