import pytest

from cellindex.errors import DataError
from cellindex.particle import Particle
from cellindex.utils import (
    StaticConfig,
    read_dynamic,
    read_static,
    write_dynamic,
    write_neighbors,
    write_static,
)


def test_static_round_trip(tmp_path):
    path = tmp_path / "static.txt"
    config = StaticConfig(3, 20.0, 1.0, [0.25, 0.5, 0.37])
    write_static(config, path)
    assert read_static(path) == config


def test_static_reads_one_value_per_line(tmp_path):
    path = tmp_path / "static.txt"
    path.write_text("2\n10\n1\n0.3\n0.4\n")
    assert read_static(path) == StaticConfig(2, 10.0, 1.0, [0.3, 0.4])


def test_static_missing_radii(tmp_path):
    path = tmp_path / "static.txt"
    path.write_text("3\n10\n1\n0.3\n0.4\n")
    with pytest.raises(DataError, match="expected 3 radii"):
        read_static(path)


def test_static_bad_number(tmp_path):
    path = tmp_path / "static.txt"
    path.write_text("3\nten\n1\n")
    with pytest.raises(DataError):
        read_static(path)


def test_static_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_static(tmp_path / "nope.txt")


def test_dynamic_frames(tmp_path):
    path = tmp_path / "dynamic.txt"
    path.write_text("0\n1.0 2.0\n3.0 4.0\n1\n1.5 2.5\n3.5 4.5\n")
    frames = list(read_dynamic(path, [0.1, 0.2]))

    assert [f.time for f in frames] == [0.0, 1.0]
    assert frames[0].particles == [Particle(0, 1.0, 2.0, 0.1), Particle(1, 3.0, 4.0, 0.2)]
    assert frames[1].particles == [Particle(0, 1.5, 2.5, 0.1), Particle(1, 3.5, 4.5, 0.2)]


def test_dynamic_round_trip(tmp_path):
    path = tmp_path / "dynamic.txt"
    write_dynamic([(0.0, [(1.0, 2.0), (3.0, 4.0)]), (0.5, [(5.0, 6.0), (7.0, 8.0)])], path)
    frames = list(read_dynamic(path, [0.0, 0.0]))
    assert [f.time for f in frames] == [0.0, 0.5]
    assert [(p.x, p.y) for p in frames[1].particles] == [(5.0, 6.0), (7.0, 8.0)]


def test_dynamic_truncated_frame_not_yielded(tmp_path):
    path = tmp_path / "dynamic.txt"
    path.write_text("0\n1.0 2.0\n3.0 4.0\n1\n1.5 2.5\n")
    frames = read_dynamic(path, [0.1, 0.2])

    first = next(frames)
    assert first.time == 0.0
    with pytest.raises(DataError, match="ends after 1 of 2"):
        next(frames)


def test_dynamic_malformed_line(tmp_path):
    path = tmp_path / "dynamic.txt"
    path.write_text("0\n1.0\n3.0 4.0\n")
    with pytest.raises(DataError):
        list(read_dynamic(path, [0.1, 0.2]))


def test_dynamic_more_particles_than_static(tmp_path):
    path = tmp_path / "dynamic.txt"
    path.write_text("0\n1.0 2.0\n3.0 4.0\n5.0 6.0\n")
    with pytest.raises(DataError):
        list(read_dynamic(path, [0.1, 0.2]))


def test_write_neighbors(tmp_path):
    a, b, c = Particle(0, 1.0, 1.0), Particle(1, 1.5, 1.0), Particle(2, 8.0, 8.0)
    path = tmp_path / "neighbors.txt"
    write_neighbors({b: [a], a: [b]}, path, ids=[0, 1, 2])
    assert path.read_text().splitlines() == ["0 1", "1 0", "2"]
