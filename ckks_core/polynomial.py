"""
Polynomial Arithmetic
Dense univariate polynomials over any coefficient ring, Euclidean division,
and the negacyclic quotient ring R = K[X]/(X^N + 1).
"""

import logging
import numbers
from fractions import Fraction

logger = logging.getLogger(__name__)


def _is_zero(c):
    return c == 0


def _divide(a, b):
    """Coefficient division. Integers stay integers when b divides a exactly."""
    if _is_zero(b):
        raise ZeroDivisionError("Coefficient division by zero")
    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        q, r = divmod(int(a), int(b))
        return q if r == 0 else Fraction(int(a), int(b))
    return a / b


def _top(coeffs):
    """Index of the highest non-zero coefficient, -1 if there is none."""
    for i in range(len(coeffs) - 1, -1, -1):
        if not _is_zero(coeffs[i]):
            return i
    return -1


class Term:
    """A monomial coefficient * x^degree."""

    __slots__ = ('coefficient', 'degree')

    def __init__(self, coefficient, degree=0):
        if degree < 0:
            raise ValueError(f"Term degree must be non-negative, got {degree}")
        object.__setattr__(self, 'coefficient', coefficient)
        object.__setattr__(self, 'degree', int(degree))

    def __setattr__(self, name, value):
        raise AttributeError(f"Term is immutable, cannot set {name!r}")

    def __add__(self, other):
        self._check_same_degree(other)
        return Term(self.coefficient + other.coefficient, self.degree)

    def __sub__(self, other):
        self._check_same_degree(other)
        return Term(self.coefficient - other.coefficient, self.degree)

    def __mul__(self, other):
        if isinstance(other, Term):
            return Term(self.coefficient * other.coefficient, self.degree + other.degree)
        return Term(self.coefficient * other, self.degree)

    def __rmul__(self, other):
        return Term(other * self.coefficient, self.degree)

    def __truediv__(self, other):
        if not isinstance(other, Term):
            other = Term(other)
        if other.degree > self.degree:
            raise ValueError(
                f"Cannot divide x^{self.degree} by x^{other.degree} in a polynomial ring")
        return Term(_divide(self.coefficient, other.coefficient), self.degree - other.degree)

    def __neg__(self):
        return Term(-self.coefficient, self.degree)

    def __eq__(self, other):
        if isinstance(other, Term):
            return self.degree == other.degree and self.coefficient == other.coefficient
        return NotImplemented

    def __hash__(self):
        return hash((self.coefficient, self.degree))

    def __str__(self):
        return f"{self.coefficient}x^{self.degree}"

    def __repr__(self):
        return f"Term({self.coefficient!r}, {self.degree})"

    def _check_same_degree(self, other):
        if self.degree != other.degree:
            raise ValueError(
                f"Terms of different degree cannot be combined: {self.degree} != {other.degree}")


class Polynomial:
    """
    Dense polynomial, coefficients[i] is the coefficient of x^i.

    Coefficients can be any type with + - * and a comparison against 0
    (int, Fraction, float, complex, numpy scalars, field elements). Division
    additionally needs /. Every operator returns a new Polynomial.
    """

    __slots__ = ('_coeffs',)

    # Make numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, coefficients):
        coeffs = tuple(coefficients)
        if not coeffs:
            coeffs = (0,)
        self._coeffs = coeffs

    @classmethod
    def monomial(cls, coefficient, degree):
        zero = coefficient - coefficient
        return cls([zero] * degree + [coefficient])

    @property
    def coefficients(self):
        return self._coeffs

    @property
    def terms(self):
        return tuple(Term(c, d) for d, c in enumerate(self._coeffs))

    def degree(self):
        """Highest degree with a non-zero coefficient; 0 for the zero polynomial."""
        return max(_top(self._coeffs), 0)

    def is_zero(self):
        return _top(self._coeffs) < 0

    def leading_term(self):
        d = self.degree()
        return Term(self._coeffs[d], d)

    def trim(self):
        """Copy without trailing zero coefficients."""
        return Polynomial(self._coeffs[:self.degree() + 1])

    def evaluate(self, x):
        """Evaluate at x using Horner's method."""
        result = self._zero()
        for c in reversed(self._coeffs):
            result = result * x + c
        return result

    __call__ = evaluate

    def _zero(self):
        c = self._coeffs[0]
        return c - c

    @staticmethod
    def _coerce(other):
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, Term):
            return Polynomial.monomial(other.coefficient, other.degree)
        return Polynomial([other])

    def __len__(self):
        return len(self._coeffs)

    def __iter__(self):
        return iter(self._coeffs)

    def __getitem__(self, degree):
        if degree < len(self._coeffs):
            return self._coeffs[degree]
        return self._zero()

    def __add__(self, other):
        other = self._coerce(other)
        a, b = self._coeffs, other._coeffs
        out = []
        for i in range(max(len(a), len(b))):
            if i >= len(b):
                out.append(a[i])
            elif i >= len(a):
                out.append(b[i])
            else:
                out.append(a[i] + b[i])
        return Polynomial(out)

    def __radd__(self, other):
        return self._coerce(other) + self

    def __sub__(self, other):
        other = self._coerce(other)
        a, b = self._coeffs, other._coeffs
        out = []
        for i in range(max(len(a), len(b))):
            if i >= len(b):
                out.append(a[i])
            elif i >= len(a):
                out.append(-b[i])
            else:
                out.append(a[i] - b[i])
        return Polynomial(out)

    def __rsub__(self, other):
        return self._coerce(other) - self

    def __mul__(self, other):
        other = self._coerce(other)
        a, b = self._coeffs, other._coeffs
        out = [self._zero()] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            for j, y in enumerate(b):
                out[i + j] = out[i + j] + x * y
        return Polynomial(out)

    def __rmul__(self, other):
        return self._coerce(other) * self

    def __neg__(self):
        return Polynomial(-c for c in self._coeffs)

    def __divmod__(self, other):
        """
        Euclidean division. Returns (quotient, remainder) with
        self == quotient * other + remainder and
        remainder.degree() < other.degree() unless the remainder is zero.
        """
        divisor = self._coerce(other)
        if divisor.is_zero():
            raise ZeroDivisionError("Polynomial division by the zero polynomial")

        d_deg = divisor.degree()
        d_coeffs = divisor._coeffs
        lead = divisor.leading_term()
        zero = self._zero()

        # Scratch buffers, the operands themselves are never touched
        remainder = list(self._coeffs)
        quotient = [zero] * max(1, len(remainder) - d_deg)

        top = _top(remainder)
        while top >= d_deg:
            t = Term(remainder[top], top) / lead
            quotient[t.degree] = quotient[t.degree] + t.coefficient
            for i in range(d_deg + 1):
                remainder[i + t.degree] = remainder[i + t.degree] - t.coefficient * d_coeffs[i]
            # Cancelled exactly in theory; pin it so inexact types terminate
            remainder[top] = zero
            top = _top(remainder)

        return Polynomial(quotient), Polynomial(remainder)

    __truediv__ = __divmod__

    def __floordiv__(self, other):
        return divmod(self, other)[0]

    def __mod__(self, other):
        return divmod(self, other)[1]

    def __eq__(self, other):
        if isinstance(other, Polynomial):
            return self._coeffs == other._coeffs
        return NotImplemented

    def __hash__(self):
        return hash(self._coeffs)

    def __str__(self):
        return " + ".join(str(t) for t in self.terms if not _is_zero(t.coefficient))

    def __repr__(self):
        return f"Polynomial({list(self._coeffs)!r})"


class PolynomialRing:
    """Quotient ring K[X]/(X^N + 1) on top of Polynomial."""

    def __init__(self, N):
        if N < 1 or N & (N - 1) != 0:
            raise ValueError(f"N must be a power of 2, got {N}")
        self.N = N
        self.modulus = Polynomial([1] + [0] * (N - 1) + [1])
        logger.debug("Polynomial ring: X^%d + 1", N)

    def _lift(self, a):
        if isinstance(a, Polynomial):
            return a
        return Polynomial(a)

    def reduce(self, a):
        """Remainder modulo X^N + 1, as exactly N coefficients."""
        _, r = divmod(self._lift(a), self.modulus)
        coeffs = list(r.coefficients[:self.N])
        zero = r[0] - r[0]
        coeffs.extend([zero] * (self.N - len(coeffs)))
        return Polynomial(coeffs)

    def add(self, a, b):
        return self.reduce(self._lift(a) + self._lift(b))

    def sub(self, a, b):
        return self.reduce(self._lift(a) - self._lift(b))

    def mul_scalar(self, a, scalar):
        return self.reduce(self._lift(a) * scalar)

    def mul(self, a, b):
        """Multiply in the ring: plain convolution, then X^N = -1."""
        return self.reduce(self._lift(a) * self._lift(b))

    def neg(self, a):
        return self.reduce(-self._lift(a))
