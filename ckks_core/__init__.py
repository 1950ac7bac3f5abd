"""Polynomial ring arithmetic and the CKKS canonical embedding."""

from .logging_config import setup_logging, disable_logging
from .polynomial import Term, Polynomial, PolynomialRing
from .ckks_encoder import CKKSEncoder, SingularMatrixError, DEFAULT_M

__all__ = [
    'Term',
    'Polynomial',
    'PolynomialRing',
    'CKKSEncoder',
    'SingularMatrixError',
    'DEFAULT_M',
    'setup_logging',
    'disable_logging',
]
