from __future__ import annotations
from dataclasses import dataclass, replace


# ---------------------------------------------------------------------------
# Parameter set
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BlackScholesParams:
    """Everything needed to value one European option.

    Inputs are *not* validated here: non-positive ``price``, ``strike``,
    ``vol`` or ``time_to_expiry`` flow through the formulas as ``nan`` /
    ``inf``.  Reject bad inputs before building the record (the CLI does).

    Fields may hold NumPy arrays; the pricing functions broadcast.

    Parameters
    ----------
    price : float
        Spot price of the underlying.
    strike : float
        Option strike.
    rate : float
        Continuously-compounded risk-free rate (may be negative).
    div_yield : float
        Continuously-compounded dividend yield.
    vol : float
        Annualised volatility as a decimal (0.20 = 20%).
    time_to_expiry : float
        Years to expiry.
    """
    price: float
    strike: float
    rate: float
    div_yield: float
    vol: float
    time_to_expiry: float

    def replace(self, **changes) -> BlackScholesParams:
        """Return a copy with some fields changed."""
        return replace(self, **changes)


CALL = "call"
PUT  = "put"


def sign_of(kind: str) -> float:
    """``+1.0`` for a call, ``-1.0`` for a put."""
    if kind == CALL:
        return 1.0
    if kind == PUT:
        return -1.0
    raise ValueError(f"kind must be 'call' or 'put', got {kind!r}")
