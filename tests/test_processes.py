"""Tests for the GBM path generators."""

import math
import numpy as np
import pytest

from mcpricer.core import SimulationParameters, InvalidParameter
from mcpricer.processes import simulate_path, gbm_paths
from mcpricer.sampling import NormalSampler

S0, r, sigma, T = 100.0, 0.05, 0.2, 1.0
N_STEPS, N_PATHS, SEED = 50, 100_000, 42
PARAMS = SimulationParameters(S0=S0, sigma=sigma, T=T, n_steps=N_STEPS)


class TestSimulatePath:
    def test_shape_and_start(self):
        path = simulate_path(PARAMS, r, NormalSampler(SEED))
        assert path.shape == (N_STEPS + 1,)
        assert path[0] == S0
        assert np.all(path > 0)

    def test_matches_stepwise_recursion(self):
        """Each step multiplies by exp((r - sigma^2/2) dt + sigma sqrt(dt) Z)."""
        path = simulate_path(PARAMS, r, NormalSampler(SEED))
        Z = NormalSampler(SEED).standard_normal(N_STEPS)
        dt = T / N_STEPS
        expected = [S0]
        for z in Z:
            expected.append(expected[-1] * math.exp((r - 0.5 * sigma ** 2) * dt
                                                    + sigma * math.sqrt(dt) * z))
        np.testing.assert_allclose(path, expected, rtol=1e-12)

    def test_zero_vol_is_deterministic_growth(self):
        params = SimulationParameters(S0=S0, sigma=0.0, T=T, n_steps=10)
        path = simulate_path(params, r)
        t = np.linspace(0.0, T, 11)
        np.testing.assert_allclose(path, S0 * np.exp(r * t), rtol=1e-12)

    def test_zero_drift_allowed(self):
        assert simulate_path(PARAMS, 0.0).shape == (N_STEPS + 1,)

    def test_negative_drift_rejected(self):
        with pytest.raises(InvalidParameter) as exc:
            simulate_path(PARAMS, -0.01)
        assert exc.value.field == "drift_rate"


class TestGBMPaths:
    def test_output_shape(self):
        paths = gbm_paths(PARAMS, r, 1000, NormalSampler(SEED))
        assert paths.shape == (N_STEPS + 1, 1000)
        assert np.all(paths[0] == S0)

    def test_mean_terminal(self):
        """E[S_T] = S0 exp(rT) under the risk-neutral measure."""
        paths = gbm_paths(PARAMS, r, N_PATHS, NormalSampler(SEED))
        expected = S0 * np.exp(r * T)
        assert abs(paths[-1].mean() - expected) / expected < 0.01

    def test_log_terminal_variance(self):
        paths = gbm_paths(PARAMS, r, N_PATHS, NormalSampler(SEED))
        log_ret = np.log(paths[-1] / S0)
        assert abs(log_ret.var() - sigma ** 2 * T) / (sigma ** 2 * T) < 0.02

    def test_columns_match_single_paths(self):
        """Column j of a batch uses the j-th normal of every step row."""
        paths = gbm_paths(PARAMS, r, 3, NormalSampler(SEED))
        Z = NormalSampler(SEED).standard_normal((N_STEPS, 3))
        dt = T / N_STEPS
        log_st = np.sum((r - 0.5 * sigma ** 2) * dt + sigma * np.sqrt(dt) * Z, axis=0)
        np.testing.assert_allclose(paths[-1], S0 * np.exp(log_st), rtol=1e-12)

    def test_n_paths_must_be_positive(self):
        with pytest.raises(InvalidParameter):
            gbm_paths(PARAMS, r, 0)

    def test_n_paths_must_be_integer(self):
        with pytest.raises(InvalidParameter):
            gbm_paths(PARAMS, r, 2.0)

    def test_fractional_steps_rejected_before_simulation(self):
        with pytest.raises(InvalidParameter) as exc:
            SimulationParameters(S0=S0, sigma=sigma, T=T, n_steps=2.5)
        assert exc.value.field == "n_steps"
