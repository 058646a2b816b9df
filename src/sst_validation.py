import xarray            as xr
import numpy             as np
from sst_errors          import ShapeMismatchError, GridShapeMismatchError

__all__ = ["SSTValidation"]

class SSTValidation:

    def __init__(self, **kwargs):
        return

    def coerce_sst_field(self, sst, time_dim="time"):
        """
        Return SST as a float array: a 1-D series or a (rows, cols, time) field.

        DataArrays carrying a ``time`` dimension are transposed so time is the
        last axis. Row and column vectors (1 x N, N x 1) are flattened to a
        series. Any other layout is left as-is for `validate_time_axis` to judge.
        """
        if isinstance(sst, xr.DataArray):
            if time_dim in sst.dims and sst.ndim == 3:
                sst = sst.transpose(..., time_dim)
            sst = sst.values
        arr = np.asarray(sst, dtype=float)
        if arr.ndim == 2 and 1 in arr.shape:
            arr = arr.ravel()
        return arr

    def validate_time_axis(self, sst, n_time):
        """
        Confirm the time axis length ``n_time`` fits the SST data.

        Raises
        ------
        ShapeMismatchError
            When ``n_time`` matches no dimension of ``sst``, when a 3-D field
            only matches it on a spatial axis, or when ``sst`` is neither a
            series nor a 3-D field.
        """
        shape = tuple(sst.shape)
        if n_time not in shape:
            raise ShapeMismatchError(f"length of time ({n_time}) does not match any dimension of sst {shape}")
        if sst.ndim == 1:
            return
        if sst.ndim != 3:
            raise ShapeMismatchError(f"sst must be a 1-D series or a 3-D (rows, cols, time) field; got shape {shape}")
        if shape[2] != n_time:
            raise ShapeMismatchError(f"length of time ({n_time}) matches a spatial dimension of sst {shape}; "
                                     "time must be the third dimension")

    def validate_coordinate_grids(self, sst, lat, lon):
        """
        Confirm lat/lon are 2-D meshes matching the spatial shape of ``sst``.

        Both ``None`` is valid (whole-field averaging). A 1-D coordinate vector
        is always rejected: it would broadcast silently against a 2-D grid and
        misplace the mask and weights.

        Returns
        -------
        tuple of numpy.ndarray or (None, None)
        """
        if lat is None and lon is None:
            return None, None
        if lat is None or lon is None:
            raise GridShapeMismatchError("lat and lon must be supplied together")
        lat = np.asarray(lat.values if isinstance(lat, xr.DataArray) else lat, dtype=float)
        lon = np.asarray(lon.values if isinstance(lon, xr.DataArray) else lon, dtype=float)
        if lat.ndim != 2 or lon.ndim != 2:
            raise GridShapeMismatchError("lat, lon grids must be 2-D matrices as if generated by meshgrid; "
                                         f"got lat{lat.shape}, lon{lon.shape}")
        if sst.ndim != 3:
            raise GridShapeMismatchError(f"lat, lon grids require a 3-D sst field; got sst{tuple(sst.shape)}")
        if not (lat.shape == lon.shape == tuple(sst.shape[:2])):
            raise GridShapeMismatchError(f"dimensions of lat{lat.shape}, lon{lon.shape} and the sst grid "
                                         f"{tuple(sst.shape[:2])} must all agree")
        return lat, lon
