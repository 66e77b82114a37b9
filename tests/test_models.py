import pytest
from pydantic import ValidationError

from cachematrix.models import CacheStats, MatrixFile


def test_hit_rate_is_zero_without_lookups():
    stats = CacheStats()

    assert stats.lookups == 0
    assert stats.hit_rate == 0.0


def test_hit_rate():
    stats = CacheStats(hits=3, misses=1, invalidations=2)

    assert stats.lookups == 4
    assert stats.hit_rate == pytest.approx(0.75)


def test_counters_cannot_be_negative():
    with pytest.raises(ValidationError):
        CacheStats(hits=-1)


def test_matrix_file_requires_rectangular_rows():
    assert MatrixFile(rows=[[1, 2], [3, 4]]).rows == [[1.0, 2.0], [3.0, 4.0]]

    with pytest.raises(ValidationError, match="row 1 has 1 entries, expected 2"):
        MatrixFile(rows=[[1, 2], [3]])


@pytest.mark.parametrize(
    "rows",
    [
        [["1", "2"], ["3", "4"]],
        [[True, False], [False, True]],
    ],
)
def test_matrix_file_rejects_strings_and_booleans(rows):
    with pytest.raises(ValidationError):
        MatrixFile(rows=rows)


def test_matrix_file_keeps_mixed_ints_and_floats():
    assert MatrixFile(rows=[[1, 2.5]]).rows == [[1, 2.5]]
