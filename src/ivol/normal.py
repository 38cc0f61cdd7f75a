# normal.py
# Standard-normal CDF / PDF.  Both accept scalars or arrays.

from __future__ import annotations
import numpy as np
from scipy.special import ndtr

_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)


def cdf(x):
    """Standard-normal cumulative distribution function."""
    return ndtr(x)


def pdf(x):
    """Standard-normal density, ``exp(-x^2/2) / sqrt(2 pi)``."""
    x = np.asarray(x, dtype=float)
    return _INV_SQRT_2PI * np.exp(-0.5 * x * x)
