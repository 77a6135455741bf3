import numpy as np
import pytest


@pytest.fixture
def square_ring():
    # unit square, counter-clockwise, closed: 4 vertices + closing duplicate
    yield np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]])


@pytest.fixture
def triangle_ring():
    yield np.array([[0.0, 0.0], [2.0, 0.0], [1.0, 2.0], [0.0, 0.0]])


@pytest.fixture
def write_file(tmp_path):
    """Write bytes (or text encoded as utf-8) to a file in tmp_path and return its path."""

    def _write(content, name="points.csv"):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return str(path)

    yield _write
