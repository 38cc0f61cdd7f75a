"""Implied volatility by Newton-Raphson on the Black-Scholes call premium.

The solver is seeded with the Corrado-Miller closed-form estimate and uses
the analytic ``dPremium/dVol`` as the derivative.  Puts are converted to the
equivalent call price through put/call parity and solved on the call side.

Outcomes are values, not exceptions:

* :class:`Converged` -- successive iterates moved by less than ``tol``.
* :class:`FallbackUsed` with ``reason="exhausted"`` -- ``maxiter`` reached;
  carries the last iterate.
* :class:`FallbackUsed` with ``reason="diverged"`` -- the last iterate is not
  a finite, normal float (typically vega underflowed to zero); carries the
  Corrado-Miller seed instead, so the payload is always finite.

The diverged substitution can make a genuinely unsolvable price (e.g. deep
out-of-the-money quotes) look like a reasonable estimate.  Check
``result.converged`` when that matters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ClassVar, Union

import numpy as np

from .core import BlackScholesParams
from .black_scholes import call_premium, callput_price, dtv_dvol

__all__ = [
    "EPS",
    "MAX_ITER",
    "Converged",
    "FallbackUsed",
    "ImpliedVol",
    "approx_vol",
    "find_root",
    "call_impl_vol",
    "put_impl_vol",
]

logger = logging.getLogger(__name__)

EPS = 1e-7          # absolute change between iterates
MAX_ITER = 60_000

_TINY = np.finfo(float).tiny


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Converged:
    """Newton-Raphson met the tolerance; ``vol`` is the implied volatility."""
    vol: float
    iterations: int
    converged: ClassVar[bool] = True


@dataclass(frozen=True)
class FallbackUsed:
    """The solver did not converge; ``vol`` is a finite best-effort estimate.

    ``reason`` is ``"exhausted"`` (last iterate returned) or ``"diverged"``
    (Corrado-Miller seed returned).
    """
    vol: float
    reason: str
    iterations: int
    converged: ClassVar[bool] = False


ImpliedVol = Union[Converged, FallbackUsed]


# ---------------------------------------------------------------------------
# Seed
# ---------------------------------------------------------------------------
def approx_vol(market_price: float, p: BlackScholesParams) -> float:
    """Corrado-Miller closed-form implied-vol estimate from a *call* price.

    The term under the inner square root goes slightly negative for prices
    near the arbitrage bounds; it is clamped to zero.
    """
    S, K, r, q, T = (
        np.asarray(x, dtype=float)
        for x in (p.price, p.strike, p.rate, p.div_yield, p.time_to_expiry)
    )
    dprice = S * np.exp(-q * T)
    dstrike = K * np.exp(-r * T)
    psdiff = dprice - dstrike
    mdiff = market_price - psdiff / 2.0
    under_root = np.maximum(0.0, mdiff * mdiff - psdiff * psdiff / np.pi)
    guess = np.sqrt(2.0 * np.pi) / (dprice + dstrike) * (mdiff + np.sqrt(under_root))
    return float(guess / np.sqrt(T))


# ---------------------------------------------------------------------------
# Newton-Raphson
# ---------------------------------------------------------------------------
def find_root(
    func: Callable[[float], float],
    fprime: Callable[[float], float],
    x0: float,
    *,
    tol: float = EPS,
    maxiter: int = MAX_ITER,
) -> tuple[float, bool, int]:
    """Plain Newton-Raphson iteration ``x <- x - f(x) / f'(x)``.

    Stops when two successive iterates differ by less than ``tol``.  A
    non-finite iterate ends the loop early, since it cannot recover.

    Returns
    -------
    tuple
        ``(x, converged, iterations)`` where ``x`` is the last iterate.
    """
    x = x0
    with np.errstate(all="ignore"):
        for i in range(1, maxiter + 1):
            x_new = x - np.divide(func(x), fprime(x))
            if abs(x_new - x) < tol:
                return float(x_new), True, i
            x = x_new
            if not np.isfinite(x):
                return float(x), False, i
    return float(x), False, maxiter


def _is_normal(x: float) -> bool:
    return bool(np.isfinite(x)) and abs(x) >= _TINY


# ---------------------------------------------------------------------------
# Public solvers
# ---------------------------------------------------------------------------
def call_impl_vol(
    market_price: float,
    p: BlackScholesParams,
    *,
    tol: float = EPS,
    maxiter: int = MAX_ITER,
) -> ImpliedVol:
    """Implied volatility from a call's market price.

    ``p.vol`` is ignored; every other field of ``p`` is used as is.
    """
    vol_guess = approx_vol(market_price, p)

    def f(v):
        return call_premium(p.replace(vol=v)) - market_price

    def fprime(v):
        return dtv_dvol(p.replace(vol=v))

    root, converged, n_iter = find_root(f, fprime, vol_guess, tol=tol, maxiter=maxiter)
    if converged:
        return Converged(vol=root, iterations=n_iter)

    if _is_normal(root):
        logger.debug("implied vol not converged after %d iterations, last iterate %r",
                     n_iter, root)
        return FallbackUsed(vol=root, reason="exhausted", iterations=n_iter)

    logger.debug("implied vol diverged (%r) after %d iterations, using seed %r",
                 root, n_iter, vol_guess)
    return FallbackUsed(vol=vol_guess, reason="diverged", iterations=n_iter)


def put_impl_vol(
    market_price: float,
    p: BlackScholesParams,
    *,
    tol: float = EPS,
    maxiter: int = MAX_ITER,
) -> ImpliedVol:
    """Implied volatility from a put's market price (solved on the call side)."""
    call_price = callput_price(False, market_price, p)
    return call_impl_vol(float(call_price), p, tol=tol, maxiter=maxiter)
