"""Tests for sst_trends: least-squares trend fitting and detrending."""

import numpy as np
import pytest
import xarray as xr

from sst_errors import InsufficientDataWarning

np.random.seed(42)
T = np.arange(120, dtype=float)
NOISY_LINE = 3.0 + 0.25 * T + np.random.normal(0, 0.5, T.size)


def _slope(y, x=T):
    ok = np.isfinite(y)
    return np.polyfit(x[ok], y[ok], 1)[0]


class TestFitTrend:

    def test_exact_line(self, toolbox):
        np.testing.assert_allclose(toolbox.fit_trend(2.0 - 0.5 * T), 2.0 - 0.5 * T, atol=1e-10)

    def test_evaluated_at_missing_steps(self, toolbox):
        y = 1.0 + 2.0 * T
        y[[0, 50]] = np.nan
        fit = toolbox.fit_trend(y)
        assert fit[0] == pytest.approx(1.0)
        assert fit[50] == pytest.approx(101.0)

    def test_custom_abscissa(self, toolbox):
        x = 730486.0 + 30.0 * T
        np.testing.assert_allclose(toolbox.fit_trend(0.1 * x, x=x), 0.1 * x, rtol=1e-10)

    def test_quadratic(self, toolbox):
        y = 1.0 + 0.1 * T - 0.01 * T ** 2
        np.testing.assert_allclose(toolbox.fit_trend(y, order="quadratic"), y, atol=1e-8)

    def test_constant(self, toolbox):
        fit = toolbox.fit_trend(np.array([1.0, np.nan, 3.0]), order=0)
        np.testing.assert_allclose(fit, 2.0)

    def test_none_is_zero(self, toolbox):
        np.testing.assert_array_equal(toolbox.fit_trend(T, order="none"), 0.0)

    def test_one_point_is_insufficient(self, toolbox):
        assert toolbox.fit_trend(np.array([np.nan, 4.0, np.nan])) is None

    def test_degenerate_abscissa_is_insufficient(self, toolbox):
        assert toolbox.fit_trend(np.array([1.0, 2.0]), x=np.array([5.0, 5.0])) is None

    def test_unknown_order(self, toolbox):
        with pytest.raises(ValueError):
            toolbox.fit_trend(T, order="cubic")
        with pytest.raises(ValueError):
            toolbox.fit_trend(T, order=3)


class TestDetrend:

    def test_noisy_line_has_zero_slope(self, toolbox):
        out = toolbox.detrend(NOISY_LINE)
        assert _slope(out) == pytest.approx(0.0, abs=1e-10)

    def test_residuals_are_the_noise(self, toolbox):
        out = toolbox.detrend(NOISY_LINE)
        assert np.std(out) == pytest.approx(0.5, abs=0.1)
        assert np.mean(out) == pytest.approx(0.0, abs=1e-10)

    def test_missing_steps_stay_missing(self, toolbox):
        y = NOISY_LINE.copy()
        y[[2, 3, 90]] = np.nan
        out = toolbox.detrend(y)
        assert out.size == y.size
        assert np.isnan(out[[2, 3, 90]]).all()
        assert _slope(out) == pytest.approx(0.0, abs=1e-10)

    def test_too_few_points_warns_and_is_all_missing(self, toolbox):
        y = np.full(10, np.nan)
        y[3] = 1.0
        with pytest.warns(InsufficientDataWarning):
            out = toolbox.detrend(y)
        assert out.shape == (10,)
        assert np.isnan(out).all()

    def test_dataarray_keeps_coordinates(self, toolbox):
        da = xr.DataArray(NOISY_LINE, dims=("time",), coords={"time": 730486.0 + T}, name="sst")
        out = toolbox.detrend(da)
        assert isinstance(out, xr.DataArray)
        np.testing.assert_array_equal(out["time"].values, da["time"].values)
        assert out.name == "sst"

    def test_constant_order_removes_mean(self, toolbox):
        out = toolbox.detrend(NOISY_LINE, order="constant")
        assert np.mean(out) == pytest.approx(0.0, abs=1e-10)
        assert _slope(out) == pytest.approx(0.25, abs=0.05)

    def test_none_order_is_identity(self, toolbox):
        np.testing.assert_array_equal(toolbox.detrend(NOISY_LINE, order="none"), NOISY_LINE)
