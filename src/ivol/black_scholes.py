# black_scholes.py
# Black-Scholes premiums, Greeks, put/call parity and bump-and-reprice.
#
# Every call/put pair is one sign-parameterised formula (+1 call, -1 put).
# Inputs are coerced to NumPy floats, so bad inputs give nan/inf instead of
# raising, and array-valued parameter sets broadcast.

from __future__ import annotations
import numpy as np
from typing import Callable

from .core import BlackScholesParams, CALL, sign_of
from .normal import cdf, pdf

__all__ = [
    "d1", "d2",
    "call_premium", "put_premium",
    "call_delta", "put_delta", "gamma", "vega",
    "call_theta", "put_theta", "call_rho", "put_rho", "call_phi", "put_phi",
    "dtv_dvol", "dtv_drate", "dtv_ddiv",
    "greeks", "callput_price", "simulate_call", "simulate_put",
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _unpack(p: BlackScholesParams):
    """(S, K, r, q, sigma, T) as float arrays."""
    return tuple(
        np.asarray(x, dtype=float)
        for x in (p.price, p.strike, p.rate, p.div_yield, p.vol, p.time_to_expiry)
    )


def _sign(is_call: bool) -> float:
    return 1.0 if is_call else -1.0


# ---------------------------------------------------------------------------
# d1 / d2
# ---------------------------------------------------------------------------
def d1(p: BlackScholesParams):
    S, K, r, q, sigma, T = _unpack(p)
    return (np.log(S / K) + (r - q + 0.5 * sigma * sigma) * T) / (sigma * np.sqrt(T))


def d2(p: BlackScholesParams):
    _, _, _, _, sigma, T = _unpack(p)
    return d1(p) - sigma * np.sqrt(T)


# ---------------------------------------------------------------------------
# Premium
# ---------------------------------------------------------------------------
def _generic_premium(sign: float, p: BlackScholesParams):
    S, K, r, q, sigma, T = _unpack(p)
    return (sign * S * cdf(sign * d1(p)) * np.exp(-q * T)
            - sign * K * cdf(sign * d2(p)) * np.exp(-r * T))


def call_premium(p: BlackScholesParams) -> float:
    """Black-Scholes call premium."""
    return _generic_premium(1.0, p)


def put_premium(p: BlackScholesParams) -> float:
    """Black-Scholes put premium."""
    return _generic_premium(-1.0, p)


# ---------------------------------------------------------------------------
# Greeks
# ---------------------------------------------------------------------------
def _generic_delta(sign: float, p: BlackScholesParams):
    _, _, _, q, _, T = _unpack(p)
    return sign * np.exp(-q * T) * cdf(sign * d1(p))


def call_delta(p: BlackScholesParams) -> float:
    return _generic_delta(1.0, p)


def put_delta(p: BlackScholesParams) -> float:
    return _generic_delta(-1.0, p)


def gamma(p: BlackScholesParams) -> float:
    """Gamma, identical for calls and puts."""
    S, _, _, q, sigma, T = _unpack(p)
    return np.exp(-q * T) * pdf(d1(p)) / (S * sigma * np.sqrt(T))


def dtv_dvol(p: BlackScholesParams) -> float:
    """Raw derivative of the premium w.r.t. volatility (call and put alike)."""
    S, _, _, q, _, T = _unpack(p)
    return S * np.exp(-q * T) * pdf(d1(p)) * np.sqrt(T)


def vega(p: BlackScholesParams) -> float:
    """Premium change for a one-point (0.01) move in volatility."""
    return 0.01 * dtv_dvol(p)


def _generic_theta(sign: float, p: BlackScholesParams):
    S, K, r, q, sigma, T = _unpack(p)
    dprice = S * np.exp(-q * T)
    dstrike = K * np.exp(-r * T)
    d_1 = d1(p)
    d_2 = d2(p)
    return (sign * q * dprice * cdf(sign * d_1)
            - sign * r * dstrike * cdf(sign * d_2)
            - dprice * sigma / (2.0 * np.sqrt(T)) * pdf(d_1))


def call_theta(p: BlackScholesParams) -> float:
    """Call theta, per year."""
    return _generic_theta(1.0, p)


def put_theta(p: BlackScholesParams) -> float:
    """Put theta, per year."""
    return _generic_theta(-1.0, p)


def dtv_drate(is_call: bool, p: BlackScholesParams) -> float:
    """Raw derivative of the premium w.r.t. the risk-free rate."""
    sign = _sign(is_call)
    _, K, r, _, _, T = _unpack(p)
    return sign * K * np.exp(-r * T) * T * cdf(sign * d2(p))


def call_rho(p: BlackScholesParams) -> float:
    """Call premium change for a one-point (0.01) move in the rate."""
    return 0.01 * dtv_drate(True, p)


def put_rho(p: BlackScholesParams) -> float:
    return 0.01 * dtv_drate(False, p)


def dtv_ddiv(is_call: bool, p: BlackScholesParams) -> float:
    """Raw derivative of the premium w.r.t. the dividend yield."""
    sign = _sign(is_call)
    S, _, _, q, _, T = _unpack(p)
    return -sign * T * S * np.exp(-q * T) * cdf(sign * d1(p))


def call_phi(p: BlackScholesParams) -> float:
    """Call premium change for a one-point (0.01) move in the dividend yield."""
    return 0.01 * dtv_ddiv(True, p)


def put_phi(p: BlackScholesParams) -> float:
    return 0.01 * dtv_ddiv(False, p)


def greeks(p: BlackScholesParams, kind: str = CALL) -> dict[str, float]:
    """Premium and all Greeks for one side.

    Vega, rho and phi are per one-point (0.01) move; theta is per year.

    Returns
    -------
    dict[str, float]
        Keys: ``premium``, ``delta``, ``gamma``, ``vega``, ``theta``,
        ``rho``, ``phi``.
    """
    sign = sign_of(kind)
    is_call = kind == CALL
    return {
        "premium": _generic_premium(sign, p),
        "delta": _generic_delta(sign, p),
        "gamma": gamma(p),
        "vega": vega(p),
        "theta": _generic_theta(sign, p),
        "rho": 0.01 * dtv_drate(is_call, p),
        "phi": 0.01 * dtv_ddiv(is_call, p),
    }


# ---------------------------------------------------------------------------
# Put/call parity
# ---------------------------------------------------------------------------
def callput_price(is_call_price: bool, market_price: float, p: BlackScholesParams) -> float:
    """Convert one side's price into the other side's via put/call parity.

    Parameters
    ----------
    is_call_price : bool
        ``True`` if ``market_price`` is a call price (a put price comes
        back), ``False`` if it is a put price (a call price comes back).
    """
    sign = _sign(is_call_price)
    S, K, r, q, _, T = _unpack(p)
    dprice = S * np.exp(-q * T)
    dstrike = K * np.exp(-r * T)
    return market_price - sign * (dprice - dstrike)


# ---------------------------------------------------------------------------
# Bump-and-reprice
# ---------------------------------------------------------------------------
def _simulate(
    premium: Callable[[BlackScholesParams], float],
    source: BlackScholesParams,
    bump: Callable[[BlackScholesParams], BlackScholesParams],
):
    return premium(bump(source)) - premium(source)


def simulate_call(
    source: BlackScholesParams,
    bump: Callable[[BlackScholesParams], BlackScholesParams],
) -> float:
    """Call premium change when ``source`` is replaced by ``bump(source)``.

    Dividing by the bump size gives a finite-difference Greek, e.g.::

        h = 1e-5
        delta = simulate_call(p, lambda c: c.replace(price=c.price + h)) / h
    """
    return _simulate(call_premium, source, bump)


def simulate_put(
    source: BlackScholesParams,
    bump: Callable[[BlackScholesParams], BlackScholesParams],
) -> float:
    """Same as :func:`simulate_call` for the put."""
    return _simulate(put_premium, source, bump)
