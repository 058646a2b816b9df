import numpy             as np
import pandas            as pd
import xarray            as xr
from datetime            import date, datetime

__all__ = ["SSTCalendar", "DATENUM_UNIX_EPOCH"]

# serial day number of 1970-01-01 (0001-01-01 is day 367)
DATENUM_UNIX_EPOCH = 719529.0

class SSTCalendar:

    def __init__(self, **kwargs):
        return

    def to_day_number(self, time):
        """
        Convert a time axis to continuous serial day numbers.

        Parameters
        ----------
        time : scalar or array-like
            Any of: numeric day numbers (returned as float, unchanged),
            ``numpy.datetime64`` values, ``datetime``/``date``/``pandas.Timestamp``
            objects, formatted date strings, or calendar vectors given as an
            N x 3 ``[Y, M, D]`` or N x 6 ``[Y, M, D, h, m, s]`` numeric array.

        Returns
        -------
        float or numpy.ndarray
            Day numbers on the same scale as MATLAB's ``datenum``
            (1970-01-01 -> 719529). A scalar input returns a float.

        Notes
        -----
        - Month and day overflow in calendar vectors carries over (month 13 is
          January of the next year), fractional days are kept.
        - Timezone-aware timestamps are converted to UTC first.
        """
        if isinstance(time, (xr.DataArray, pd.Series)):
            time = time.values
        if isinstance(time, (datetime, date, pd.Timestamp, str)):
            return float(self.to_day_number([time])[0])
        arr = np.asarray(time)
        if arr.ndim == 0:
            return float(self.to_day_number(arr.reshape(1))[0])
        kind = arr.dtype.kind
        if kind == "M":
            return (arr - np.datetime64("1970-01-01", "D")) / np.timedelta64(1, "D") + DATENUM_UNIX_EPOCH
        if kind in "iufb":
            if arr.ndim == 2 and arr.shape[1] in (3, 6):
                return self._datevec_to_day_number(arr.astype(float))
            return arr.astype(float).ravel() if arr.ndim > 1 and 1 in arr.shape else arr.astype(float)
        if kind in "USO":
            stamps = pd.to_datetime(list(arr.ravel()))
            if stamps.tz is not None:
                stamps = stamps.tz_convert("UTC").tz_localize(None)
            return self.to_day_number(stamps.to_numpy())
        raise TypeError(f"unsupported time representation with dtype {arr.dtype}")

    @staticmethod
    def _datevec_to_day_number(vec):
        if not np.all(np.isfinite(vec)):
            raise ValueError("calendar vectors must not contain missing values")
        months = ((vec[:, 0] - 1970) * 12 + (vec[:, 1] - 1)).astype(np.int64)
        month0 = months.astype("datetime64[M]").astype("datetime64[D]")
        days   = (month0 - np.datetime64("1970-01-01", "D")) / np.timedelta64(1, "D")
        frac   = vec[:, 2] - 1
        if vec.shape[1] == 6:
            frac = frac + vec[:, 3] / 24 + vec[:, 4] / 1440 + vec[:, 5] / 86400
        return days + frac + DATENUM_UNIX_EPOCH

    def from_day_number(self, days):
        """Inverse of `to_day_number`; returns ``datetime64[s]`` values."""
        days = np.atleast_1d(np.asarray(days, dtype=float))
        if not np.all(np.isfinite(days)):
            raise ValueError("time axis contains missing or non-finite day numbers")
        secs = np.round((days - DATENUM_UNIX_EPOCH) * 86400.0).astype(np.int64)
        return np.datetime64("1970-01-01T00:00:00", "s") + secs.astype("timedelta64[s]")

    def infer_cadence(self, days):
        """
        Classify a time axis as ``'monthly'`` or ``'daily'`` from its median step.

        A median spacing of up to 1.5 days is daily; anything else (monthly,
        weekly, pentad, annual, ...) is phased by calendar month.
        """
        days = np.asarray(days, dtype=float)
        if days.size < 2:
            return "monthly"
        step = float(np.median(np.diff(days)))
        if 0.0 < step <= 1.5:
            return "daily"
        if not 27.0 <= step <= 32.0:
            self.logger.info(f"median time step of {step:.2f} days; seasonal phase taken as calendar month")
        return "monthly"

    def seasonal_phase(self, days, cadence="auto"):
        """
        Seasonal phase label for each time step.

        Monthly cadence gives the calendar month (1-12); daily cadence gives
        ``month * 100 + day`` so that 29 February is kept as its own phase
        rather than shifting every later day of a leap year.
        """
        cadence = self.infer_cadence(days) if cadence == "auto" else cadence
        stamps  = self.from_day_number(days)
        month   = stamps.astype("datetime64[M]").astype(np.int64) % 12 + 1
        if cadence == "monthly":
            return month
        if cadence == "daily":
            day = (stamps.astype("datetime64[D]") - stamps.astype("datetime64[M]").astype("datetime64[D]")).astype(np.int64) + 1
            return month * 100 + day
        raise ValueError("cadence must be 'auto', 'monthly' or 'daily'")
