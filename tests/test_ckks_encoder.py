"""
Test Suite for the CKKS canonical embedding
Encode/decode round trips, plaintext-domain operations and failure modes.
"""

import numpy as np
import pytest

from ckks_core import CKKSEncoder, Polynomial, SingularMatrixError

DATA = [1.0, 2.0, 3.0, 4.0]


@pytest.fixture
def encoder():
    return CKKSEncoder(M=8)


def test_initialization(encoder):
    """Slot count and ring follow from M"""
    assert encoder.M == 8
    assert encoder.n == 4
    assert encoder.root_exponents == (1, 3, 5, 7)
    assert encoder.ring.N == 4
    assert np.isclose(encoder.xi ** 8, 1)


def test_invalid_order():
    for M in (0, 1, 6, 12):
        with pytest.raises(ValueError):
            CKKSEncoder(M=M)


def test_root_exponent_table_length():
    with pytest.raises(ValueError):
        CKKSEncoder(M=8, root_exponents=(1, 3, 5))


def test_roots_are_roots_of_cyclotomic(encoder):
    roots = encoder.roots()
    np.testing.assert_allclose(roots ** encoder.n, -np.ones(encoder.n), atol=1e-12)
    np.testing.assert_allclose(roots, encoder.xi ** np.array([1, 3, 5, 7]), atol=1e-12)


def test_vandermonde_layout(encoder):
    V = encoder.vandermonde()
    roots = encoder.roots()
    assert V.shape == (4, 4)
    for r in range(4):
        for c in range(4):
            assert np.isclose(V[r, c], roots[r] ** c)


def test_round_trip(encoder):
    encoded = encoder.encode(DATA)
    assert encoded.shape == (4,)
    decoded = encoder.decode(encoded)
    np.testing.assert_allclose(decoded.real, DATA, rtol=1e-9)
    np.testing.assert_allclose(decoded.imag, np.zeros(4), atol=1e-9)


def test_conjugate_symmetric_data_encodes_to_real_coefficients(encoder):
    # Roots xi^k and xi^(M-k) are conjugates, so slots k and n-1-k pair up
    symmetric = encoder.encode([1.0, 2.0, 2.0, 1.0])
    np.testing.assert_allclose(symmetric.imag, np.zeros(4), atol=1e-12)

    asymmetric = encoder.encode(DATA)
    assert np.max(np.abs(asymmetric.imag)) > 0.1


def test_round_trip_other_orders():
    rng = np.random.default_rng(3)
    for M in (2, 4, 16, 32):
        enc = CKKSEncoder(M=M)
        data = rng.uniform(-10, 10, size=M // 2)
        np.testing.assert_allclose(enc.decode(enc.encode(data)), data, rtol=1e-9, atol=1e-9)


def test_complex_data_round_trip(encoder):
    data = np.array([1 + 2j, -3j, 0.5, 4 - 1j])
    np.testing.assert_allclose(encoder.decode(encoder.encode(data)), data, atol=1e-9)


def test_decode_is_polynomial_evaluation(encoder):
    encoded = encoder.encode(DATA)
    poly = encoder.to_polynomial(encoded)
    expected = [poly(root) for root in encoder.roots()]
    np.testing.assert_allclose(encoder.decode(encoded), expected, atol=1e-12)


def test_additive_homomorphism(encoder):
    a, b = encoder.encode(DATA), encoder.encode(DATA)
    np.testing.assert_allclose(encoder.decode(encoder.add_plain(a, b)), [2, 4, 6, 8], rtol=1e-9)


def test_subtractive_homomorphism(encoder):
    a, b = encoder.encode(DATA), encoder.encode(DATA)
    np.testing.assert_allclose(encoder.decode(encoder.sub_plain(a, b)), np.zeros(4), atol=1e-9)


def test_mul_plain_is_hadamard_product(encoder):
    a, b = encoder.encode(DATA), encoder.encode([4.0, 3.0, 2.0, 1.0])
    np.testing.assert_allclose(encoder.mul_plain(a, b), a * b)


def test_mul_ring_multiplies_slots(encoder):
    a, b = encoder.encode(DATA), encoder.encode([4.0, 3.0, 2.0, 1.0])
    product = encoder.decode(encoder.mul_ring(a, b))
    np.testing.assert_allclose(product, [4, 6, 6, 4], rtol=1e-9, atol=1e-9)


def test_from_polynomial_reduces(encoder):
    # X^4 = -1 in the ring, so every slot decodes to -1
    encoded = encoder.from_polynomial(Polynomial([0, 0, 0, 0, 1]))
    np.testing.assert_allclose(encoded, [-1, 0, 0, 0])
    np.testing.assert_allclose(encoder.decode(encoded), -np.ones(4), atol=1e-12)


def test_length_mismatch(encoder):
    with pytest.raises(ValueError) as excinfo:
        encoder.encode([1.0, 2.0, 3.0])
    assert not isinstance(excinfo.value, SingularMatrixError)

    with pytest.raises(ValueError):
        encoder.decode(np.zeros(5))
    with pytest.raises(ValueError):
        encoder.add_plain(np.zeros(4), np.zeros(3))
    with pytest.raises(ValueError):
        encoder.mul_plain(np.zeros(4), np.zeros((4, 1)))


def test_non_finite_data_is_a_precondition_error(encoder):
    for bad in ([np.nan, 1.0, 2.0, 3.0], [1.0, np.inf, 2.0, 3.0]):
        with pytest.raises(ValueError) as excinfo:
            encoder.encode(bad)
        assert not isinstance(excinfo.value, SingularMatrixError)

    with pytest.raises(ValueError):
        encoder.decode([1.0, 2.0, np.nan, 4.0])


def test_overflowing_solve_is_reported(encoder, caplog):
    # Finite input whose projection Q^H y overflows to inf
    data = np.full(4, 1.5e308)
    with np.errstate(all="ignore"), caplog.at_level("ERROR", logger="ckks_core"):
        with pytest.raises(SingularMatrixError):
            encoder.encode(data)
    assert "non-finite" in caplog.text


def test_singular_system_is_reported():
    degenerate = CKKSEncoder(M=8, root_exponents=(1, 1, 3, 5))
    with pytest.raises(SingularMatrixError):
        degenerate.encode(DATA)
    assert issubclass(SingularMatrixError, np.linalg.LinAlgError)


def test_singular_system_is_logged(caplog):
    degenerate = CKKSEncoder(M=8, root_exponents=(0, 0, 0, 0))
    with caplog.at_level("ERROR", logger="ckks_core"):
        with pytest.raises(SingularMatrixError):
            degenerate.encode(DATA)
    assert "Singular encoding matrix" in caplog.text
