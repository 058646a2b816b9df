import warnings
import xarray            as xr
import numpy             as np
from scipy.stats         import linregress
from sst_errors          import InsufficientDataWarning

__all__ = ["SSTTrends"]

_TREND_ORDERS = {"none": None, "constant": 0, "linear": 1, "quadratic": 2}

class SSTTrends:

    def __init__(self, **kwargs):
        return

    @staticmethod
    def _trend_order(order):
        if isinstance(order, str):
            if order not in _TREND_ORDERS:
                raise ValueError(f"trend must be one of {list(_TREND_ORDERS)}; got '{order}'")
            return _TREND_ORDERS[order]
        if order is not None and order not in (0, 1, 2):
            raise ValueError(f"trend order must be 0, 1 or 2; got {order}")
        return order

    def fit_trend(self, y, x=None, order=1):
        """
        Least-squares polynomial trend over the finite samples of ``y``.

        Parameters
        ----------
        y : array-like
            Series to fit; NaNs are left out of the fit.
        x : array-like, optional
            Abscissa; defaults to the sample index ``0..N-1``.
        order : {0, 1, 2, None} or {'none', 'constant', 'linear', 'quadratic'}, default 1
            ``None``/``'none'`` gives a zero trend.

        Returns
        -------
        numpy.ndarray or None
            The fitted trend evaluated at every ``x`` (including steps where
            ``y`` is missing), or None when there are fewer than ``order + 1``
            valid samples or ``x`` does not vary across them.
        """
        order = self._trend_order(order)
        y     = np.asarray(y, dtype=float)
        x     = np.arange(y.size, dtype=float) if x is None else np.asarray(x, dtype=float)
        if order is None:
            return np.zeros(y.shape)
        ok    = np.isfinite(y) & np.isfinite(x)
        if ok.sum() < order + 1:
            return None
        if order == 0:
            return np.full(y.shape, y[ok].mean())
        if np.ptp(x[ok]) == 0:
            return None
        if order == 1:
            fit = linregress(x[ok], y[ok])
            self.logger.debug(f"  • linear fit: slope={fit.slope:.4e}, intercept={fit.intercept:.4e}, r={fit.rvalue:.3f}")
            return fit.intercept + fit.slope * x
        x0     = x[ok].mean()
        coeffs = np.polyfit(x[ok] - x0, y[ok], order)
        return np.polyval(coeffs, x - x0)

    def _insufficient_data(self, what, n_valid, n_needed):
        msg = f"{what}: {n_valid} valid sample(s), at least {n_needed} needed for the trend fit; returning all-missing series"
        self.logger.warning(msg)
        warnings.warn(msg, InsufficientDataWarning, stacklevel=3)

    def detrend(self, series, order=None, x=None):
        """
        Remove a least-squares trend from a series.

        The trend is fitted against the time-step index (or ``x``) using only
        non-missing samples and subtracted at every step; missing steps stay
        missing. When the fit is impossible an `InsufficientDataWarning` is
        issued and the result is all-NaN, keeping the series length.

        Parameters
        ----------
        series : xarray.DataArray or array-like
        order : {'constant', 'linear', 'quadratic'} or int, optional
            Defaults to ``self.final_trend`` or ``'linear'``.
        x : array-like, optional

        Returns
        -------
        xarray.DataArray or numpy.ndarray
            Same type, coordinates and length as ``series``.
        """
        order  = order if order is not None else getattr(self, "final_trend", "linear")
        n_ord  = self._trend_order(order)
        values = np.asarray(series.values if isinstance(series, xr.DataArray) else series, dtype=float)
        self.logger.info(f"Removing **{order}** trend from {values.size}-step series")
        if n_ord is None:
            out = values.copy()
        else:
            trend = self.fit_trend(values, x=x, order=n_ord)
            if trend is None:
                self._insufficient_data("detrend", int(np.isfinite(values).sum()), n_ord + 1)
                out = np.full(values.shape, np.nan)
            else:
                out = values - trend
        if isinstance(series, xr.DataArray):
            return series.copy(data=out)
        return out
