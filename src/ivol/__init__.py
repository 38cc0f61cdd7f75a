# ivol: Black-Scholes pricing, Greeks and implied volatility
# Public API

# Parameter set
from .core import BlackScholesParams, CALL, PUT

# Standard normal
from .normal import cdf, pdf

# Premiums, Greeks, parity, bump-and-reprice
from .black_scholes import (
    d1, d2,
    call_premium, put_premium,
    call_delta, put_delta, gamma, vega,
    call_theta, put_theta, call_rho, put_rho, call_phi, put_phi,
    dtv_dvol, dtv_drate, dtv_ddiv,
    greeks, callput_price, simulate_call, simulate_put,
)

# Implied volatility
from .implied_vol import (
    EPS, MAX_ITER,
    Converged, FallbackUsed, ImpliedVol,
    approx_vol, find_root, call_impl_vol, put_impl_vol,
)

__all__ = [
    # Parameter set
    "BlackScholesParams", "CALL", "PUT",
    # Standard normal
    "cdf", "pdf",
    # Pricing
    "d1", "d2", "call_premium", "put_premium",
    # Greeks
    "call_delta", "put_delta", "gamma", "vega",
    "call_theta", "put_theta", "call_rho", "put_rho", "call_phi", "put_phi",
    "dtv_dvol", "dtv_drate", "dtv_ddiv", "greeks",
    # Parity & simulation
    "callput_price", "simulate_call", "simulate_put",
    # Implied volatility
    "EPS", "MAX_ITER", "Converged", "FallbackUsed", "ImpliedVol",
    "approx_vol", "find_root", "call_impl_vol", "put_impl_vol",
]

__version__ = "0.1.0"
