import pytest

from puzterm.errors import MalformedHeaderError
from puzterm.utils import format_elapsed, load_puzzle, package_version


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00:00"), (59.9, "0:00:59"), (61, "0:01:01"), (3600, "1:00:00"), (36000 + 125, "10:02:05")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


def test_load_puzzle(tmp_path, small_puzzle_bytes, small_puzzle_file):
    path = tmp_path / "tiny.puz"
    path.write_bytes(small_puzzle_bytes)
    assert load_puzzle(str(path)) == small_puzzle_file


def test_load_puzzle_not_a_puzzle(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(MalformedHeaderError):
        load_puzzle(str(path))


def test_package_version():
    assert package_version()
