import xarray            as xr
import numpy             as np

__all__ = ["SSTSeasonal"]

class SSTSeasonal:

    def __init__(self, **kwargs):
        return

    def _working_series(self, values, days, trend):
        """Series with the climatology-estimation trend removed; None if the fit is impossible."""
        fit = self.fit_trend(values, x=days, order=self._trend_order(trend))
        if fit is None:
            return None
        return values - fit

    def compute_climatology(self, series, cadence=None, trend=None):
        """
        Climatological seasonal cycle of a time series.

        The series is first detrended against day number (``trend``, default
        ``self.seasonal_trend``) so that a long-term warming or cooling does
        not leak into the cycle, then averaged per seasonal phase ignoring
        missing values.

        Parameters
        ----------
        series : xarray.DataArray
            1-D series with a ``time`` coordinate of serial day numbers.
        cadence : {'auto', 'monthly', 'daily'}, optional
        trend : {'none', 'linear', 'quadratic'}, optional

        Returns
        -------
        xarray.DataArray
            One value per phase along dim ``phase``; NaN for a phase with no
            valid observation. All-NaN (with an `InsufficientDataWarning`)
            when the trend cannot be fitted.
        """
        cadence = cadence if cadence is not None else getattr(self, "cadence", "auto")
        trend   = trend   if trend   is not None else getattr(self, "seasonal_trend", "linear")
        days    = series["time"].values
        phase   = self.seasonal_phase(days, cadence=cadence)
        values  = np.asarray(series.values, dtype=float)
        working = self._working_series(values, days, trend)
        if working is None:
            self._insufficient_data("climatology", int(np.isfinite(values).sum()), self._trend_order(trend) + 1)
            working = np.full(values.shape, np.nan)
        W = xr.DataArray(working, dims=("time",), coords={"phase": ("time", phase)})
        return W.groupby("phase").mean(skipna=True)

    def deseason(self, series, cadence=None, trend=None):
        """
        Remove the seasonal cycle and the overall mean from a time series.

        Steps
        -----
        1. detrend a working copy of the series against day number;
        2. climatology = per-phase mean of the working copy;
        3. subtract each step's phase climatology from the ORIGINAL series,
           which keeps its long-term trend;
        4. subtract the overall mean of the original series.

        Missing values stay missing at their time step. If the working-copy
        trend cannot be fitted (fewer than 2 valid points) the result is
        all-NaN and an `InsufficientDataWarning` is issued.

        Returns
        -------
        xarray.DataArray
            Anomaly series with the coordinates of ``series``.
        """
        cadence = cadence if cadence is not None else getattr(self, "cadence", "auto")
        trend   = trend   if trend   is not None else getattr(self, "seasonal_trend", "linear")
        days    = series["time"].values
        values  = np.asarray(series.values, dtype=float)
        self.logger.info(f"Removing **SEASONAL CYCLE** ({cadence} cadence, {trend} trend during climatology estimation)")
        phase   = self.seasonal_phase(days, cadence=cadence)
        working = self._working_series(values, days, trend)
        if working is None:
            self._insufficient_data("deseason", int(np.isfinite(values).sum()), self._trend_order(trend) + 1)
            return series.copy(data=np.full(values.shape, np.nan))
        W      = xr.DataArray(working, dims=("time",), coords={"phase": ("time", phase)})
        clim   = W.groupby("phase").mean(skipna=True)
        clim_t = clim.sel(phase=phase).values
        y_mean = float(series.mean(skipna=True))
        self.logger.debug("\n[Deseason Steps]\n"
                          f"  1. {len(clim)} seasonal phases, {int(np.isnan(clim.values).sum())} without data\n"
                          f"  2. Overall mean removed: {y_mean:.4f}")
        return series.copy(data=values - clim_t - y_mean)
