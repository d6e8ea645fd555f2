import numpy as np
import pytest

from tensorlab.construction import (
    arange,
    cat,
    linspace,
    logspace,
    ones,
    reshape,
    zeros,
)


def test_zeros_shape_and_content():
    z = zeros((2, 3))
    assert z.shape == (2, 3)
    assert not z.any()


def test_ones_every_element_is_one():
    o = ones((4, 2))
    assert o.shape == (4, 2)
    assert np.all(o == 1)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        zeros((2, -1))


def test_arange_inclusive_endpoints():
    r = arange(1, 5, 1)
    assert r[0] == 1
    assert r[-1] == 5
    assert np.all(np.diff(r) == 1)


def test_arange_descending():
    r = arange(2, 0, -0.5)
    assert r[0] == 2
    assert r[-1] == 0
    assert np.allclose(np.diff(r), -0.5)


def test_arange_stops_before_overshoot():
    r = arange(0, 1, 0.3)
    assert r[-1] <= 1
    assert r[-1] + 0.3 > 1


def test_arange_zero_step_rejected():
    with pytest.raises(ValueError, match="non-null"):
        arange(0, 1, 0)


def test_arange_incoherent_bounds_rejected():
    with pytest.raises(ValueError, match="incoherent"):
        arange(5, 1, 1)


def test_linspace_endpoints_and_spacing():
    r = linspace(-2.0, 3.0, 11)
    assert len(r) == 11
    assert r[0] == -2.0
    assert r[-1] == pytest.approx(3.0)
    assert np.allclose(np.diff(r), np.diff(r)[0])


def test_linspace_single_point():
    r = linspace(4.0, 4.0, 1)
    assert r.tolist() == [4.0]


@pytest.mark.parametrize("a,b,n", [(0.0, 1.0, 1), (0.0, 1.0, 0), (0.0, 0.0, -3)])
def test_linspace_invalid_points(a, b, n):
    with pytest.raises(ValueError, match="invalid number of points"):
        linspace(a, b, n)


def test_logspace_is_power_of_linspace():
    r = logspace(0.0, 3.0, 7)
    np.testing.assert_allclose(np.log10(r), linspace(0.0, 3.0, 7))


def test_logspace_invalid_points():
    with pytest.raises(ValueError):
        logspace(1.0, 2.0, 1)


def test_reshape_round_trip_keeps_order():
    t = np.arange(6.0).reshape(2, 3)
    r = reshape(t, (3, 2))
    assert r.shape == (3, 2)
    np.testing.assert_array_equal(r.ravel(), t.ravel())
    np.testing.assert_array_equal(reshape(r, (2, 3)), t)


def test_reshape_returns_copy():
    t = np.arange(4.0)
    r = reshape(t, (2, 2))
    r[0, 0] = 99.0
    assert t[0] == 0.0


def test_reshape_size_mismatch():
    with pytest.raises(ValueError):
        reshape(np.arange(5), (2, 3))


def test_cat_along_rows():
    a = np.arange(6.0).reshape(2, 3)
    b = np.arange(3.0).reshape(1, 3) + 10
    r = cat([a, b], 0)
    assert r.shape == (a.shape[0] + b.shape[0], 3)
    np.testing.assert_array_equal(r[:2], a)
    np.testing.assert_array_equal(r[2:], b)


def test_cat_vectors_into_columns():
    a = np.array([1.0, 2.0, 3.0])
    b = np.array([4.0, 5.0, 6.0])
    r = cat([a, b], 1)
    np.testing.assert_array_equal(r[:, 0], a)
    np.testing.assert_array_equal(r[:, 1], b)


def test_cat_inconsistent_sizes():
    with pytest.raises(ValueError, match="inconsistent"):
        cat([np.zeros((2, 3)), np.zeros((2, 4))], 0)


def test_cat_requires_inputs():
    with pytest.raises(ValueError):
        cat([], 0)


def test_cat_negative_dimension():
    with pytest.raises(ValueError):
        cat([np.zeros(2)], -1)