import numpy             as np

__all__ = ["SSTGridWork"]

class SSTGridWork:

    def __init__(self, **kwargs):
        return

    def normalise_longitudes(self, lon, to="-180-180"):
        """Wrap longitudes (degrees) onto [-180, 180) or [0, 360); NaNs pass through."""
        lon = np.mod(np.asarray(lon, dtype=float), 360.0)
        lon = np.where(lon >= 360.0, 0.0, lon)  # float rounding of tiny negatives
        if to == "0-360":
            return lon
        if to == "-180-180":
            return np.where(lon >= 180.0, lon - 360.0, lon)
        raise ValueError("to must be '0-360' or '-180-180'")

    def mesh_coordinates(self, lat, lon):
        """
        Build 2-D (lat, lon) meshes from 1-D coordinate vectors.

        Rows follow ``lat`` and columns follow ``lon``, matching SST fields laid
        out as (lat, lon, time). Use this explicitly when a dataset only carries
        coordinate vectors; the pipeline itself refuses 1-D coordinates.
        """
        lat = np.asarray(lat, dtype=float)
        lon = np.asarray(lon, dtype=float)
        if lat.ndim != 1 or lon.ndim != 1:
            raise ValueError("mesh_coordinates expects 1-D latitude and longitude vectors")
        LON, LAT = np.meshgrid(lon, lat)
        return LAT, LON

    @staticmethod
    def _coordinate_spacing(coord, unwrap=False):
        """
        Per-cell coordinate spacing (radians) of a 2-D mesh.

        Gradients along each grid axis longer than one cell are combined in
        quadrature, which recovers the plain spacing on a rectilinear mesh
        (the coordinate only varies along one axis). Interior cells take the
        central difference, edges and cells next to a non-finite neighbour the
        one-sided difference; a cell with no finite neighbour along an axis
        takes the median spacing of that axis. Only cells whose own coordinate
        is non-finite get NaN. A coordinate with no measurable spacing
        anywhere, e.g. the longitude of a single-column grid, falls back to a
        nominal 1 degree.
        """
        rad   = np.deg2rad(np.asarray(coord, dtype=float))
        grads = []
        for ax in (0, 1):
            if rad.shape[ax] < 2:
                continue
            d = np.diff(rad, axis=ax)
            if unwrap:
                d = (d + np.pi) % (2 * np.pi) - np.pi
            pad = np.full_like(np.take(rad, [0], axis=ax), np.nan)
            fwd = np.concatenate([d, pad], axis=ax)
            bwd = np.concatenate([pad, d], axis=ax)
            g   = np.where(np.isfinite(fwd) & np.isfinite(bwd), (fwd + bwd) / 2,
                           np.where(np.isfinite(fwd), fwd, bwd))
            ok  = np.isfinite(g)
            fill = np.median(np.abs(g[ok])) if ok.any() else 0.0
            grads.append(np.where(ok | ~np.isfinite(rad), g, fill))
        if not grads:
            return np.full(rad.shape, np.deg2rad(1.0))
        spacing = np.sqrt(sum(g ** 2 for g in grads))
        if not np.any(spacing[np.isfinite(spacing)] > 0):
            spacing = np.where(np.isfinite(rad), np.deg2rad(1.0), np.nan)
        return spacing

    def compute_grid_cell_area(self, lat, lon, earth_radius=None, area_scale=None):
        """
        Compute cell areas for a 2-D latitude/longitude mesh.

        Each cell is treated as a spherical band segment centred on its
        coordinate, with latitude and longitude extents taken from the local
        mesh spacing:

            A = R^2 * dlon * |sin(lat + dlat/2) - sin(lat - dlat/2)|

        Band edges are clipped to the poles.

        Parameters
        ----------
        lat, lon : numpy.ndarray
            2-D coordinate meshes in degrees, identical shapes.
        earth_radius : float, optional
            Radius in metres; defaults to ``self.earth_radius`` or 6,371,000 m.
        area_scale : float, optional
            Divisor applied to m^2; defaults to ``self.area_scale`` or 1e6 (km^2).

        Returns
        -------
        numpy.ndarray
            Areas with the shape of ``lat``. Cells with non-finite coordinates
            get NaN.

        Notes
        -----
        - Exact for regular rectilinear grids (it reduces to the familiar
          latitude-band formula); an approximation on curvilinear grids, where
          model-supplied cell areas should be preferred.
        """
        earth_radius = earth_radius if earth_radius is not None else getattr(self, "earth_radius", 6371000.0)
        area_scale   = area_scale   if area_scale   is not None else getattr(self, "area_scale", 1e6)
        lat          = np.asarray(lat, dtype=float)
        lon          = np.asarray(lon, dtype=float)
        dlat         = self._coordinate_spacing(lat)
        dlon         = self._coordinate_spacing(lon, unwrap=True)
        phi          = np.deg2rad(lat)
        north        = np.clip(phi + dlat / 2, -np.pi / 2, np.pi / 2)
        south        = np.clip(phi - dlat / 2, -np.pi / 2, np.pi / 2)
        area         = (earth_radius ** 2) * dlon * np.abs(np.sin(north) - np.sin(south))
        return area / area_scale

    def region_mask(self, lat, lon, lat_range, lon_range):
        """
        Boolean mask of grid cells inside a latitude/longitude box (edges inclusive).

        Grid longitudes are wrapped to [-180, 180) before testing, so grids in
        the 0-360 convention work unchanged. The box itself must not cross the
        antimeridian: ``lon_range[0]`` has to be the western (smaller) edge.
        Cells with non-finite coordinates are outside the mask.
        """
        lat_min, lat_max = float(lat_range[0]), float(lat_range[1])
        lon_min, lon_max = float(lon_range[0]), float(lon_range[1])
        if lat_min > lat_max:
            raise ValueError(f"latitude range {lat_range} must be ordered south to north")
        if lon_min > lon_max:
            raise ValueError(f"longitude range {lon_range} crosses the antimeridian, which is not supported")
        lat = np.asarray(lat, dtype=float)
        lon = self.normalise_longitudes(np.asarray(lon, dtype=float), to="-180-180")
        with np.errstate(invalid="ignore"):
            return (lat >= lat_min) & (lat <= lat_max) & (lon >= lon_min) & (lon <= lon_max)
