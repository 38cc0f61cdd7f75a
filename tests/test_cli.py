"""Tests for the ivol command line."""

import pytest
from ivol import BlackScholesParams
from ivol.black_scholes import call_premium, put_premium, call_delta
from ivol.cli import main


def _value(out: str, label: str) -> float:
    for line in out.splitlines():
        if line.strip().startswith(label):
            return float(line.split("=")[1].split()[0])
    raise AssertionError(f"{label!r} not found in output:\n{out}")


P = BlackScholesParams(price=100.0, strike=110.0, rate=0.05, div_yield=0.0,
                       vol=0.12, time_to_expiry=1.5)


class TestPriceCommand:
    def test_premiums_and_greeks(self, capsys):
        rc = main(["price", "-p", "100", "-s", "110", "-r", "0.05",
                   "-v", "0.12", "-t", "1.5"])
        out = capsys.readouterr().out
        assert rc == 0
        assert abs(_value(out, "Call premium") - call_premium(P)) < 1e-8
        assert abs(_value(out, "Put premium") - put_premium(P)) < 1e-8
        assert abs(_value(out, "Call Delta") - call_delta(P)) < 1e-8
        for label in ("Put Delta", "Gamma", "Vega", "Call Theta", "Put Theta",
                      "Call Rho", "Put Rho", "Call Phi", "Put Phi"):
            _value(out, label)

    def test_defaults(self, capsys):
        main(["price", "--price", "100", "--strike", "100", "--rate", "0.05",
              "--volatility", "0.2"])
        out = capsys.readouterr().out
        # q = 0, T = 1 year
        assert abs(_value(out, "Call premium") - 10.4506) < 1e-3

    @pytest.mark.parametrize("flag,value", [
        ("-p", "-100"), ("-s", "0"), ("-v", "-0.2"), ("-t", "0"), ("-p", "abc"),
    ])
    def test_rejects_bad_inputs(self, flag, value, capsys):
        args = {"-p": "100", "-s": "110", "-r": "0.05", "-v": "0.12"}
        args[flag] = value
        argv = ["price"] + [x for kv in args.items() for x in kv]
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 2

    def test_negative_rate_allowed(self, capsys):
        rc = main(["price", "-p", "100", "-s", "100", "-r", "-0.01", "-v", "0.2"])
        assert rc == 0


class TestIVCommand:
    def test_call(self, capsys):
        rc = main(["iv", "-p", "100", "-s", "110", "-r", "0.05", "-t", "1.5",
                   "-m", repr(float(call_premium(P)))])
        out = capsys.readouterr().out
        assert rc == 0
        assert abs(float(out.split()[0]) - 0.12) < 1e-6

    def test_put(self, capsys):
        rc = main(["iv", "-p", "100", "-s", "110", "-r", "0.05", "-t", "1.5",
                   "-k", "put", "-m", repr(float(put_premium(P)))])
        out = capsys.readouterr().out
        assert rc == 0
        assert abs(float(out.split()[0]) - 0.12) < 1e-6

    def test_fallback_exit_code(self, capsys):
        rc = main(["iv", "-p", "100", "-s", "100", "-r", "0.05", "-m", "200"])
        out = capsys.readouterr().out
        assert rc == 1
        assert "fallback: diverged" in out

    def test_bad_kind(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["iv", "-p", "100", "-s", "100", "-r", "0.05", "-m", "5", "-k", "straddle"])
        assert exc.value.code == 2
