import numpy as np
import pytest

from ffnet.data import ListPatternSource, Pattern


def _patterns(n):
    return [Pattern([float(i)], [float(i % 2)], label=f"p{i}") for i in range(n)]


def test_pattern_converts_to_arrays():
    pattern = Pattern([1, 2], [3])
    assert pattern.get_inputs().dtype == float
    np.testing.assert_array_equal(pattern.get_inputs(), [1.0, 2.0])
    np.testing.assert_array_equal(pattern.get_outputs(), [3.0])
    assert pattern.has_outputs


def test_pattern_errors():
    pattern = Pattern([0.0], [1.0, 0.0])
    np.testing.assert_allclose(pattern.get_errors([0.75, 0.25]), [0.25, -0.25])


def test_pattern_errors_without_outputs():
    pattern = Pattern([0.0])
    assert not pattern.has_outputs
    assert pattern.get_errors([1.0]) is None


def test_pattern_errors_shape_mismatch():
    with pytest.raises(ValueError):
        Pattern([0.0], [1.0]).get_errors([1.0, 2.0])


def test_pattern_str():
    assert str(Pattern([0.0], [1.0], label="one")) == "one"
    assert str(Pattern([0.0], [1.0, 0.0])) == "[1.0, 0.0]"


def test_list_source_access():
    source = ListPatternSource(_patterns(4))
    assert source.size() == 4
    assert len(source) == 4
    assert not source.is_empty()
    assert source.get(2).label == "p2"
    assert [p.label for p in source] == ["p0", "p1", "p2", "p3"]


def test_empty_source():
    source = ListPatternSource([])
    assert source.is_empty()
    assert source.get_batches(4) == [source]


def test_batches_partition_source():
    source = ListPatternSource(_patterns(10))
    batches = source.get_batches(3)

    assert [b.size() for b in batches] == [4, 3, 3]
    labels = [p.label for b in batches for p in b]
    assert labels == [f"p{i}" for i in range(10)]


def test_batches_even_split():
    batches = ListPatternSource(_patterns(8)).get_batches(4)
    assert [b.size() for b in batches] == [2, 2, 2, 2]


def test_more_batches_than_patterns():
    source = ListPatternSource(_patterns(3))
    assert source.get_batches(5) == [source]


def test_default_batches_use_cpu_count(monkeypatch):
    monkeypatch.setattr("ffnet.data.patterns.os.cpu_count", lambda: 2)
    batches = ListPatternSource(_patterns(7)).get_batches()
    assert [b.size() for b in batches] == [4, 3]


def test_invalid_batch_count():
    with pytest.raises(ValueError):
        ListPatternSource(_patterns(3)).get_batches(0)
