import argparse
import logging
from .core import BlackScholesParams, CALL, PUT
from .black_scholes import (
    call_premium, put_premium, call_delta, put_delta, gamma, vega,
    call_theta, put_theta, call_rho, put_rho, call_phi, put_phi,
)
from .implied_vol import call_impl_vol, put_impl_vol

logger = logging.getLogger("ivol")


def _positive(s: str) -> float:
    try:
        v = float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value must be a float number, got {s!r}")
    if not v > 0:
        raise argparse.ArgumentTypeError(f"value must be positive, got {s}")
    return v


def _non_negative(s: str) -> float:
    try:
        v = float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value must be a float number, got {s!r}")
    if not v >= 0:
        raise argparse.ArgumentTypeError(f"value must be non-negative, got {s}")
    return v


def _kind(s: str):
    s = s.lower()
    if s in {"call", "c"}:
        return CALL
    if s in {"put", "p"}:
        return PUT
    raise argparse.ArgumentTypeError("kind must be 'call' or 'put'")


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("-p", "--price", type=_positive, required=True,
                        help="option's underlying price")
    parser.add_argument("-s", "--strike", type=_positive, required=True,
                        help="option's strike value")
    parser.add_argument("-r", "--rate", type=float, required=True, help="risk free rate")
    parser.add_argument("-d", "--div", dest="div_yield", type=float, default=0.0,
                        help="annual dividend yield")
    parser.add_argument("-t", "--time-to-expiry", dest="time_to_expiry",
                        type=_positive, default=1.0, help="time to expiry in years")


def _params(args, vol: float) -> BlackScholesParams:
    return BlackScholesParams(
        price=args.price, strike=args.strike, rate=args.rate,
        div_yield=args.div_yield, vol=vol, time_to_expiry=args.time_to_expiry,
    )


def cmd_price(args) -> int:
    bs = _params(args, args.volatility)
    print(f"Call premium = {float(call_premium(bs)):.10f}")
    print(f"Put premium  = {float(put_premium(bs)):.10f}")
    print("Greeks:")
    rows = [
        ("Call Delta", call_delta(bs)), ("Put Delta", put_delta(bs)),
        ("Gamma", gamma(bs)), ("Vega", vega(bs)),
        ("Call Theta", call_theta(bs)), ("Put Theta", put_theta(bs)),
        ("Call Rho", call_rho(bs)), ("Put Rho", put_rho(bs)),
        ("Call Phi", call_phi(bs)), ("Put Phi", put_phi(bs)),
    ]
    for name, value in rows:
        print(f"    {name:<10} = {float(value):.10f}")
    return 0


def cmd_iv(args) -> int:
    # vol is unused by the solver
    bs = _params(args, 1.0)
    solve = call_impl_vol if args.kind == CALL else put_impl_vol
    result = solve(args.market_price, bs)
    if result.converged:
        print(f"{result.vol:.10f}")
        return 0
    logger.warning("solver did not converge (%s), returning fallback", result.reason)
    print(f"{result.vol:.10f}  (fallback: {result.reason})")
    return 1


def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="ivol", description="Black-Scholes pricing and implied volatility")
    p.add_argument("--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Premiums and Greeks
    p_price = sub.add_parser("price", help="call/put premiums and Greeks")
    add_common(p_price)
    p_price.add_argument("-v", "--volatility", type=_positive, required=True,
                         help="volatility in percent (decimal)")
    p_price.set_defaults(func=cmd_price)

    # Implied volatility
    p_iv = sub.add_parser("iv", help="implied volatility from a market price")
    add_common(p_iv)
    p_iv.add_argument("-m", "--market-price", dest="market_price", type=_non_negative,
                      required=True, help="observed option price")
    p_iv.add_argument("-k", "--kind", type=_kind, default=CALL, help="call|put")
    p_iv.set_defaults(func=cmd_iv)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
