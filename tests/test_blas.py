import numpy as np
import pytest

from tensorlab.blas import addbmm, addmm, addmv, addr, baddbmm, match


@pytest.fixture
def rng():
    return np.random.default_rng(7)


def test_addmv_identity_gives_scaled_vector():
    vec = np.array([3.0, -4.0])
    result = addmv(0, np.zeros(2), 2.5, np.eye(2), vec)
    np.testing.assert_allclose(result, 2.5 * vec)


def test_addmv_beta_zero_ignores_nan_in_t():
    result = addmv(0, np.array([np.nan, np.nan]), 1, np.eye(2), np.array([1.0, 2.0]))
    assert not np.any(np.isnan(result))
    np.testing.assert_allclose(result, [1.0, 2.0])


def test_addmv_alpha_zero_gives_scaled_t():
    t = np.array([1.0, 2.0])
    result = addmv(3, t, 0, np.full((2, 2), np.inf), np.array([1.0, 1.0]))
    np.testing.assert_allclose(result, 3 * t)


def test_addmv_linear_in_beta(rng):
    mat = rng.standard_normal((3, 4))
    vec = rng.standard_normal(4)
    t = rng.standard_normal(3)
    base = addmv(0, t, 1, mat, vec)
    full = addmv(2, t, 1, mat, vec)
    np.testing.assert_allclose(full - base, 2 * t)


@pytest.mark.parametrize(
    "t, mat, vec",
    [
        (np.zeros(2), np.zeros(2), np.zeros(2)),
        (np.zeros(2), np.zeros((2, 3)), np.zeros(2)),
        (np.zeros((2, 1)), np.zeros((2, 2)), np.zeros(2)),
        (np.zeros(3), np.zeros((2, 2)), np.zeros(2)),
    ],
)
def test_addmv_rejects_bad_shapes(t, mat, vec):
    with pytest.raises(ValueError):
        addmv(1, t, 1, mat, vec)


def test_addmm_identity_right_factor(rng):
    m1 = rng.standard_normal((2, 3))
    result = addmm(0, np.zeros((2, 3)), 1.5, m1, np.eye(3))
    np.testing.assert_allclose(result, 1.5 * m1)


def test_addmm_transposed_inputs_agree(rng):
    m1 = rng.standard_normal((3, 4))
    m2 = rng.standard_normal((4, 2))
    t = rng.standard_normal((3, 2))
    plain = addmm(0.5, t, 2.0, m1, m2)
    strided = addmm(0.5, t, 2.0, np.asfortranarray(m1), m2.T.copy().T)
    np.testing.assert_allclose(plain, strided)


def test_addmm_shape(rng):
    result = addmm(1, np.zeros((3, 5)), 1, rng.standard_normal((3, 2)), rng.standard_normal((2, 5)))
    assert result.shape == (3, 5)


def test_addmm_rejects_mismatch():
    with pytest.raises(ValueError):
        addmm(1, np.zeros((2, 2)), 1, np.zeros((2, 3)), np.zeros((2, 2)))
    with pytest.raises(ValueError):
        addmm(1, np.zeros((3, 2)), 1, np.zeros((2, 2)), np.zeros((2, 2)))
    with pytest.raises(ValueError):
        addmm(1, np.zeros(2), 1, np.zeros((2, 2)), np.zeros((2, 2)))


def test_addr_unit_vector_selects_row():
    vec2 = np.array([1.0, 2.0, 3.0])
    result = addr(1, np.zeros((2, 3)), 2.0, np.array([1.0, 0.0]), vec2)
    np.testing.assert_allclose(result[0], 2.0 * vec2)
    np.testing.assert_allclose(result[1], np.zeros(3))


def test_addr_scales_t_even_when_beta_zero():
    t = np.array([[np.nan, 1.0]])
    result = addr(0, t, 1, np.array([1.0]), np.array([1.0, 1.0]))
    assert np.isnan(result[0, 0])


def test_addr_rejects_bad_sizes():
    with pytest.raises(ValueError):
        addr(1, np.zeros((2, 2)), 1, np.zeros(3), np.zeros(2))
    with pytest.raises(ValueError):
        addr(1, np.zeros((2, 2)), 1, np.zeros((2, 1)), np.zeros(2))


def test_addbmm_single_batch_matches_addmm(rng):
    b1 = rng.standard_normal((1, 2, 3))
    b2 = rng.standard_normal((1, 3, 4))
    t = rng.standard_normal((2, 4))
    np.testing.assert_allclose(
        addbmm(0.5, t, 2.0, b1, b2), addmm(0.5, t, 2.0, b1[0], b2[0])
    )


def test_addbmm_scales_t_once(rng):
    b1 = rng.standard_normal((2, 2, 3))
    b2 = rng.standard_normal((2, 3, 2))
    t = rng.standard_normal((2, 2))
    first = addmm(3.0, t, 0.5, b1[0], b2[0])
    expected = addmm(1, first, 0.5, b1[1], b2[1])
    np.testing.assert_allclose(addbmm(3.0, t, 0.5, b1, b2), expected)


def test_addbmm_no_batches_returns_t():
    t = np.ones((2, 2))
    result = addbmm(0, t, 1, np.zeros((0, 2, 3)), np.zeros((0, 3, 2)))
    np.testing.assert_allclose(result, t)


def test_addbmm_rejects_batch_mismatch():
    with pytest.raises(ValueError):
        addbmm(1, np.zeros((2, 2)), 1, np.zeros((2, 2, 3)), np.zeros((3, 3, 2)))
    with pytest.raises(ValueError):
        addbmm(1, np.zeros((2, 2)), 1, np.zeros((2, 2, 3)), np.zeros((2, 2, 2)))


def test_baddbmm_each_slice_matches_addmm(rng):
    b1 = rng.standard_normal((3, 2, 4))
    b2 = rng.standard_normal((3, 4, 5))
    t = rng.standard_normal((3, 2, 5))
    result = baddbmm(0.25, t, -1.0, b1, b2)
    assert result.shape == (3, 2, 5)
    for i in range(3):
        np.testing.assert_allclose(result[i], addmm(0.25, t[i], -1.0, b1[i], b2[i]))


def test_baddbmm_rejects_wrong_output_size():
    with pytest.raises(ValueError):
        baddbmm(1, np.zeros((2, 2, 2)), 1, np.zeros((3, 2, 2)), np.zeros((3, 2, 2)))


def test_match_pins_three_four_five():
    result = match(np.array([[0.0, 0.0]]), np.array([[3.0, 4.0]]), 1)
    np.testing.assert_allclose(result, [[25.0]])


def test_match_self_is_symmetric_with_zero_diagonal(rng):
    m = rng.standard_normal((4, 3))
    result = match(m, m, 1)
    np.testing.assert_allclose(result, result.T)
    np.testing.assert_allclose(np.diag(result), np.zeros(4), atol=1e-12)


def test_match_scales_with_gain(rng):
    m1 = rng.standard_normal((3, 2))
    m2 = rng.standard_normal((5, 2))
    np.testing.assert_allclose(match(m1, m2, 2.0), 2.0 * match(m1, m2, 1.0))


def test_match_flattens_trailing_dimensions(rng):
    m1 = rng.standard_normal((2, 2, 3))
    m2 = rng.standard_normal((3, 6))
    np.testing.assert_allclose(match(m1, m2, 1), match(m1.reshape(2, 6), m2, 1))


def test_match_rejects_inner_mismatch():
    with pytest.raises(ValueError):
        match(np.zeros((2, 3)), np.zeros((2, 4)), 1)