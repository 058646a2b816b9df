import xarray            as xr
import numpy             as np

__all__ = ["SSTRegional"]

class SSTRegional:

    def __init__(self, **kwargs):
        return

    def reduce_region(self, sst, days, lat=None, lon=None, lat_range=None, lon_range=None,
                      spatial_dim_names=("nj", "ni")):
        """
        Collapse an SST series or (rows, cols, time) field to one regional time series.

        Parameters
        ----------
        sst : numpy.ndarray
            Validated SST: 1-D series or 3-D field with time last.
        days : numpy.ndarray
            Serial day numbers of the time axis; attached as the ``time`` coordinate.
        lat, lon : numpy.ndarray, optional
            Validated 2-D coordinate meshes. Without them every cell is averaged
            with equal weight; with them the field is restricted to the box
            ``lat_range`` x ``lon_range`` and weighted by cell area.
        lat_range, lon_range : sequence of two floats, optional
            Box edges; default to the configured ``'AMO'`` region.

        Returns
        -------
        xarray.DataArray
            Series with dim ``time``. A 1-D input comes back unchanged in value.

        Notes
        -----
        - Missing cells are excluded from both the weighted sum and the sum of
          weights, so they never pull the mean towards zero.
        - A time step with no valid cell inside the region is NaN.
        """
        days = np.asarray(days, dtype=float)
        if sst.ndim == 1:
            self.logger.info("SST already a time series; regional reduction skipped")
            return xr.DataArray(sst, dims=("time",), coords={"time": days}, name="sst")
        da = xr.DataArray(sst, dims=(*spatial_dim_names, "time"), coords={"time": days}, name="sst")
        if lat is None:
            self.logger.info(f"Computing **UNWEIGHTED MEAN** over all {sst.shape[0] * sst.shape[1]} grid cells")
            return da.mean(dim=spatial_dim_names, skipna=True)
        region    = getattr(self, "index_regions", {}).get("AMO", {})
        lat_range = lat_range if lat_range is not None else region.get("lat_range", [0, 70])
        lon_range = lon_range if lon_range is not None else region.get("lon_range", [-75, 5])
        self.logger.info(f"Computing **AREA-WEIGHTED MEAN** over lat {list(lat_range)}, lon {list(lon_range)}")
        mask = self.region_mask(lat, lon, lat_range, lon_range)
        A    = self.compute_grid_cell_area(lat, lon)
        wgt  = np.where(mask & np.isfinite(A), A, 0.0)
        self.logger.debug("\n[Regional Reduction Steps]\n"
                          f"  1. Region mask keeps {int(mask.sum())} of {mask.size} cells\n"
                          f"  2. Cell areas inside region sum to {wgt.sum():.4e} (scaled units)\n"
                          "  3. Weighted mean per time step, missing cells dropped from numerator and denominator")
        if not mask.any():
            self.logger.warning("No grid cells fall inside the region; every time step will be missing")
        W = xr.DataArray(wgt, dims=spatial_dim_names)
        return da.weighted(W).mean(dim=spatial_dim_names, skipna=True)
