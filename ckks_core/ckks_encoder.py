"""
CKKS Canonical Embedding
Packs n = M/2 values into the coefficients of a ring element by solving a
Vandermonde system over the odd powers of a primitive M-th root of unity,
and unpacks them by evaluating the polynomial at the same roots.
"""

import logging

import numpy as np

from .polynomial import Polynomial, PolynomialRing

logger = logging.getLogger(__name__)

DEFAULT_M = 8

# |R_ii| / max|R_jj| below this means the Vandermonde system is rank deficient
SINGULAR_RTOL = 1e-10


class SingularMatrixError(np.linalg.LinAlgError):
    """The encoding system has no unique solution."""


class CKKSEncoder:
    def __init__(self, M=DEFAULT_M, root_exponents=None):
        if M < 2 or M & (M - 1) != 0:
            raise ValueError(f"M must be a power of 2, got {M}")
        self.M = M
        self.n = M // 2

        # Primitive M-th root of unity
        self.xi = np.exp(2j * np.pi / M)

        if root_exponents is None:
            root_exponents = range(1, 2 * self.n, 2)
        self.root_exponents = tuple(int(e) for e in root_exponents)
        if len(self.root_exponents) != self.n:
            raise ValueError(
                f"Expected {self.n} root exponents, got {len(self.root_exponents)}")

        self.ring = PolynomialRing(self.n)

        logger.info("CKKS encoder: M=%d, slots=%d", self.M, self.n)

    def roots(self):
        """xi ** e for every exponent in the table."""
        exponents = np.array(self.root_exponents, dtype=np.float64)
        return np.exp(2j * np.pi * exponents / self.M)

    def vandermonde(self):
        """V[r][c] = root_r ** c."""
        return np.vander(self.roots(), N=self.n, increasing=True)

    def _as_slots(self, values, name):
        vec = np.asarray(values, dtype=np.complex128)
        if vec.shape != (self.n,):
            raise ValueError(
                f"{name} must hold exactly {self.n} values, got shape {vec.shape}")
        if not np.all(np.isfinite(vec)):
            raise ValueError(f"{name} must hold finite values")
        return vec

    def _solve(self, A, y):
        """Solve A x = y through a QR factorisation, refusing singular systems."""
        Q, R = np.linalg.qr(A)
        diag = np.abs(np.diag(R))
        scale = diag.max()
        if scale == 0.0 or diag.min() <= SINGULAR_RTOL * scale:
            logger.error("Singular encoding matrix (min |R_ii| = %g, max |R_ii| = %g)",
                         diag.min(), scale)
            raise SingularMatrixError("Encoding matrix is singular")

        # R x = Q^H y
        x = np.linalg.solve(R, Q.conj().T @ y)

        if not np.all(np.isfinite(x)):
            logger.error("Encoding solve produced non-finite coefficients")
            raise SingularMatrixError("Encoding solve did not produce a finite solution")
        return x

    def encode(self, data):
        """
        Encode n values into the coefficient vector b with V b = data.

        Raises ValueError if data does not have n entries and
        SingularMatrixError if the Vandermonde system cannot be solved.
        """
        y = self._as_slots(data, "data")
        return self._solve(self.vandermonde(), y)

    def decode(self, encoded):
        """Evaluate the encoded polynomial at every root."""
        coeffs = self._as_slots(encoded, "encoded")
        powers = np.arange(self.n)
        return np.array([np.sum(coeffs * root ** powers) for root in self.roots()])

    def add_plain(self, a, b):
        return self._as_slots(a, "a") + self._as_slots(b, "b")

    def sub_plain(self, a, b):
        return self._as_slots(a, "a") - self._as_slots(b, "b")

    def mul_plain(self, a, b):
        """
        Elementwise (Hadamard) product of two encoded vectors.

        This is NOT the CKKS plaintext product: decode(mul_plain(...)) is not
        the slotwise product of the inputs. Use mul_ring for that.
        """
        return self._as_slots(a, "a") * self._as_slots(b, "b")

    def mul_ring(self, a, b):
        """Product of the underlying ring elements modulo X^n + 1."""
        product = self.ring.mul(self.to_polynomial(a), self.to_polynomial(b))
        return np.array(product.coefficients, dtype=np.complex128)

    def to_polynomial(self, encoded):
        return Polynomial(self._as_slots(encoded, "encoded"))

    def from_polynomial(self, poly):
        return np.array(self.ring.reduce(poly).coefficients, dtype=np.complex128)
