import os, json, logging, copy
import numpy              as np
from pathlib              import Path
from sst_calendar         import SSTCalendar
from sst_gridwork         import SSTGridWork
from sst_validation       import SSTValidation
from sst_regional         import SSTRegional
from sst_seasonal         import SSTSeasonal
from sst_trends           import SSTTrends

__all__ = ["SSTIndexToolbox", "compute_amo_index", "DEFAULT_CONFIG"]

DEFAULT_CONFIG = {"index_regions"  : {"AMO" : {"lat_range" : [0, 70],
                                               "lon_range" : [-75, 5],
                                               "long_name" : "Atlantic Multidecadal Oscillation index",
                                               "reference" : "Enfield, D.B., A.M. Mestas-Nunez, and P.J. Trimble, 2001, "
                                                             "Geophys. Res. Lett., 28: 2077-2080"}},
                  "earth_radius_m" : 6371000.0,
                  "area_scale"     : 1e6,
                  "cadence"        : "auto",
                  "seasonal_trend" : "linear",
                  "final_trend"    : "linear"}

####################################################################################################################

class SSTIndexToolbox(SSTValidation, SSTCalendar, SSTGridWork, SSTRegional, SSTSeasonal, SSTTrends):
    """
    Toolbox for computing regional sea-surface-temperature indices, chiefly the
    Atlantic Multidecadal Oscillation (AMO) following Enfield et al. (2001).

    Composition
    -----------
    - SSTValidation : shape checks on the time axis, SST field and coordinate grids
    - SSTCalendar   : serial day numbers and seasonal phases
    - SSTGridWork   : longitude wrapping, coordinate meshes, cell areas, region masks
    - SSTRegional   : unweighted / area-weighted regional mean time series
    - SSTSeasonal   : climatology and deseasoning with trend control
    - SSTTrends     : least-squares trend fitting and detrending

    Parameters
    ----------
    P_json : str | Path, optional
        JSON file whose top-level keys override `DEFAULT_CONFIG`.
    cadence : {'auto', 'monthly', 'daily'}, optional
        Seasonal phase definition; ``'auto'`` infers it from the time step.
    seasonal_trend : {'none', 'linear', 'quadratic'}, optional
        Trend removed while estimating the climatology (default ``'linear'``).
    final_trend : {'none', 'constant', 'linear', 'quadratic'}, optional
        Trend removed from the anomaly series (default ``'linear'``).
    P_log : str | Path, optional
        Log file to attach to the toolbox logger.
    log_level : int, optional
        Python logging level (default ``logging.INFO``).

    Notes
    -----
    - The pipeline is pure: nothing is read from or written to disk apart
      from the optional configuration and log files.
    """
    def __init__(self,
                 P_json         = None,# JSON config overriding DEFAULT_CONFIG; regions, earth radius,
                                       # area scaling and trend/cadence defaults
                 cadence        = None,# 'auto', 'monthly' or 'daily'
                 seasonal_trend = None,# trend removed only while estimating the climatology
                 final_trend    = None,# trend removed from the deseasoned anomalies
                 earth_radius   = None,# metres
                 area_scale     = None,# divisor applied to m^2 cell areas; 1e6 gives km^2
                 P_log          = None,# the log file to send log statements to
                 log_level      = None,# the logging level (see python logging doc for more info)
                 **kwargs):
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        if P_json is not None:
            with open(P_json, 'r') as f:
                self.config.update(json.load(f))
        log_level = log_level if log_level is not None else logging.INFO
        if not hasattr(self, 'logger'):
            self.setup_logging(logfile=P_log, log_level=log_level)
        self.index_regions  = self.config.get("index_regions" , {})
        self.cadence        = cadence        if cadence        is not None else self.config.get("cadence"       , "auto")
        self.seasonal_trend = seasonal_trend if seasonal_trend is not None else self.config.get("seasonal_trend", "linear")
        self.final_trend    = final_trend    if final_trend    is not None else self.config.get("final_trend"   , "linear")
        self.earth_radius   = earth_radius   if earth_radius   is not None else self.config.get("earth_radius_m", 6371000.0)
        self.area_scale     = area_scale     if area_scale     is not None else self.config.get("area_scale"    , 1e6)
        for k, v in kwargs.items():
            setattr(self, k, v)
        SSTValidation.__init__(self, **kwargs)
        SSTCalendar.__init__(self, **kwargs)
        SSTGridWork.__init__(self, **kwargs)
        SSTRegional.__init__(self, **kwargs)
        SSTSeasonal.__init__(self, **kwargs)
        SSTTrends.__init__(self, **kwargs)

    def summary(self):
        """Log a summary of the active configuration."""
        self.logger.info("--- SSTIndexToolbox Summary ---")
        for name, reg in self.index_regions.items():
            self.logger.info(f"Region {name:<12}: lat {reg.get('lat_range')}, lon {reg.get('lon_range')}")
        self.logger.info(f"Cadence            : {self.cadence}")
        self.logger.info(f"Seasonal Trend     : {self.seasonal_trend}")
        self.logger.info(f"Final Trend        : {self.final_trend}")
        self.logger.info(f"Earth Radius       : {self.earth_radius:.0f} m")
        self.logger.info(f"Area Scale         : {self.area_scale:.1e}")
        self.logger.info("-------------------------------")

    def setup_logging(self, logfile=None, log_level=logging.INFO):
        """Point the toolbox logger at the console and, optionally, a log file."""
        self.logger = logging.getLogger("sst_index_toolbox")
        self.logger.setLevel(log_level)
        self.logger.propagate = False
        for h in list(self.logger.handlers):
            self.logger.removeHandler(h)
            h.close()
        handlers = [logging.StreamHandler()]
        if logfile:
            os.makedirs(Path(logfile).parent, exist_ok=True)
            handlers.append(logging.FileHandler(logfile, mode='a'))
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        for h in handlers:
            h.setFormatter(formatter)
            h.setLevel(log_level)
            self.logger.addHandler(h)
        if logfile:
            self.logger.info(f"log file connected: {logfile}")

    def compute_region_index(self, sst, time, lat=None, lon=None,
                             region    = "AMO",
                             lat_range = None,
                             lon_range = None):
        """
        Regionally-averaged, deseasoned, detrended SST anomaly index.

        Parameters
        ----------
        sst : array-like or xarray.DataArray
            1-D series of N values or a (rows, cols, N) field; NaN marks
            land, ice or missing data.
        time : array-like
            N time stamps in any representation accepted by `to_day_number`.
        lat, lon : array-like, optional
            2-D coordinate meshes of shape (rows, cols). Both or neither.
        region : str, default 'AMO'
            Key into ``self.index_regions`` providing the box and metadata.
        lat_range, lon_range : sequence of two floats, optional
            Override the configured box edges.

        Returns
        -------
        xarray.DataArray
            Index of length N on dim ``time`` (serial day numbers). Steps with
            no usable data are NaN.

        Raises
        ------
        ShapeMismatchError
            Time axis length does not fit the SST data.
        GridShapeMismatchError
            Coordinate grids are unpaired, 1-D or of the wrong shape.
        """
        if region not in self.index_regions:
            raise KeyError(f"region '{region}' is not configured; available: {list(self.index_regions)}")
        reg       = self.index_regions[region]
        lat_range = lat_range if lat_range is not None else reg.get("lat_range")
        lon_range = lon_range if lon_range is not None else reg.get("lon_range")
        sst       = self.coerce_sst_field(sst)
        days      = np.atleast_1d(self.to_day_number(time))
        n_time    = days.size
        self.validate_time_axis(sst, n_time)
        lat, lon  = self.validate_coordinate_grids(sst, lat, lon)
        if lat is None:
            lat_range = lon_range = None
        self.logger.info(f"¡¡¡ COMPUTING {region} INDEX from sst{tuple(sst.shape)} over {n_time} time steps !!!")
        series = self.reduce_region(sst, days, lat=lat, lon=lon, lat_range=lat_range, lon_range=lon_range)
        anom   = self.deseason(series)
        idx    = self.detrend(anom)
        idx.name  = region
        idx.attrs = {"long_name" : reg.get("long_name", f"{region} index"),
                     "lat_range" : list(lat_range) if lat_range is not None else [],
                     "lon_range" : list(lon_range) if lon_range is not None else [],
                     "area_weighted" : int(lat is not None),
                     "reference" : reg.get("reference", "")}
        idx = idx.assign_coords(time=("time", days, {"units": "serial day number (0001-01-01 = 367)"}))
        self.logger.info(f"{region} index computed: {int(np.isfinite(idx.values).sum())} of {n_time} steps valid")
        return idx

    def compute_amo_index(self, sst, time, lat=None, lon=None):
        """
        Atlantic Multidecadal Oscillation index (Enfield et al., 2001).

        With ``lat``/``lon`` the SST field is area-weighted over the AMO box
        (0-70N, 75W-5E); without them every grid cell of a 3-D field counts
        equally, or a 1-D regional series is used as given. See
        `compute_region_index` for parameters and errors.
        """
        return self.compute_region_index(sst, time, lat=lat, lon=lon, region="AMO")

def compute_amo_index(sst, time, lat=None, lon=None, **kwargs):
    """Compute the AMO index with a default-configured `SSTIndexToolbox`; ``kwargs`` go to the toolbox."""
    return SSTIndexToolbox(**kwargs).compute_amo_index(sst, time, lat=lat, lon=lon)
