"""Tests for the convergence study helpers."""

import math
import pytest

from mcpricer.core import SimulationParameters, PricingRequest, CALL, PUT
from mcpricer.validation import relative_error, convergence_study, variance_is_stable

PARAMS = SimulationParameters(S0=100.0, sigma=0.2, T=1.0, n_steps=4)
REQ = PricingRequest(PARAMS, K=100.0, kind=CALL, n_trials=1000, r=0.05)
COUNTS = [10_000, 40_000, 160_000]


class TestRelativeError:
    def test_value(self):
        assert relative_error(10.5, 10.0) == pytest.approx(0.05)
        assert relative_error(9.5, 10.0) == pytest.approx(0.05)

    def test_zero_reference(self):
        with pytest.raises(ValueError):
            relative_error(1.0, 0.0)


class TestConvergenceStudy:
    def test_output_keys(self):
        out = convergence_study(REQ, COUNTS, seed=42)
        for key in ("n_trials", "prices", "stderrs", "variances", "errors"):
            assert len(out[key]) == 3
        assert out["n_trials"] == COUNTS
        assert out["reference"] == pytest.approx(10.4506, abs=1e-3)

    def test_stderr_decays_like_inverse_sqrt(self):
        out = convergence_study(REQ, COUNTS, seed=42)
        assert out["order"] == pytest.approx(0.5, abs=0.05)
        assert out["stderrs"][-1] < out["stderrs"][0]

    def test_variance_stable_across_counts(self):
        out = convergence_study(REQ, COUNTS, seed=7)
        assert variance_is_stable(out["variances"])

    def test_put_with_explicit_reference(self):
        req = PricingRequest(PARAMS, K=100.0, kind=PUT, n_trials=1000, r=0.05)
        out = convergence_study(req, [20_000], reference=5.5735, seed=1)
        assert out["errors"][0] < 4 * out["stderrs"][0]
        assert math.isnan(out["order"])

    def test_empty_counts(self):
        with pytest.raises(ValueError):
            convergence_study(REQ, [])


class TestVarianceIsStable:
    def test_stable(self):
        assert variance_is_stable([100.0, 105.0, 96.0])

    def test_unstable(self):
        assert not variance_is_stable([100.0, 200.0, 100.0])

    def test_all_zero(self):
        assert variance_is_stable([0.0, 0.0])
