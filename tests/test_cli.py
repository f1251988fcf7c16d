"""Tests for the command-line front end."""

import pytest

from mcpricer.cli import main

SMALL = ["--paths", "4000", "--steps", "4", "--workers", "2", "--seed", "1"]


def test_price_report(capsys):
    assert main(["price", *SMALL]) == 0
    out = capsys.readouterr().out
    assert "Call Option:" in out
    assert "Put Option:" in out
    assert "Black-Scholes:  10.450584" in out
    assert "Relative Error:" in out
    assert "Paths per second:" in out


def test_price_single_kind(capsys):
    assert main(["price", *SMALL, "--kind", "put"]) == 0
    out = capsys.readouterr().out
    assert "Put Option:" in out
    assert "Call Option:" not in out


def test_compare_serial(capsys):
    assert main(["price", *SMALL, "--compare-serial"]) == 0
    assert "Speedup:" in capsys.readouterr().out


def test_mu_is_display_only(capsys):
    main(["price", *SMALL, "--kind", "call", "--mu", "0.30"])
    with_mu = capsys.readouterr().out
    main(["price", *SMALL, "--kind", "call", "--mu", "0.01"])
    without_mu = capsys.readouterr().out
    pick = lambda s: [line for line in s.splitlines() if "Monte Carlo:" in line]
    assert pick(with_mu) == pick(without_mu)


def test_invalid_parameter_exit_code(capsys):
    assert main(["price", *SMALL, "--K", "-5"]) == 2
    assert "error: K must be positive" in capsys.readouterr().err


def test_samples(capsys):
    assert main(["samples", "--count", "3", "--seed", "5"]) == 0
    lines = [l for l in capsys.readouterr().out.splitlines() if "Sample" in l]
    assert len(lines) == 3


def test_convergence(capsys):
    assert main(["convergence", "--steps", "2", "--workers", "1", "--seed", "3",
                 "--kind", "call", "--paths-list", "2000", "8000"]) == 0
    out = capsys.readouterr().out
    assert "stderr decay order" in out


def test_bad_kind():
    with pytest.raises(SystemExit):
        main(["price", "--kind", "straddle"])
