# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""
Driver data shared by all phenology models.

Drivers are daily series laid out as (time, site) matrices: every row is a
day labelled by ``doy`` and every column an independent site or site-year.
The container is validated once and read-only afterwards, models never
modify it.

Example: three sites with constant temperature

    ```pycon
    import numpy as np
    from phenocore.data import DriverData

    data = DriverData(Ti=np.full((365, 3), 10.0), doy=np.arange(1, 366))
    data.n_sites
    ```
"""

from logging import getLogger
from typing import Literal, Optional, Sequence

import numpy as np
import xarray as xr
from pydantic import BaseModel, field_validator, model_validator

from phenocore.utils import ContractViolation, as_matrix

logger = getLogger(__name__)

MATRIX_NAMES = ("Ti", "Tmini", "Tmaxi", "Li", "Pi", "VPDi")
"""Names of the (time, site) driver matrices."""

DaylengthUnit = Literal["hours", "decihours"]


class GridLayout(BaseModel, frozen=True):
    """Regular grid on which the site columns are laid out row-major.

    Site ``i`` sits at ``y[i // len(x)]``, ``x[i % len(x)]``.
    """

    x: Sequence[float]
    y: Sequence[float]

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.y), len(self.x)


class DriverData(BaseModel, frozen=True, arbitrary_types_allowed=True):
    """Daily driver matrices for a set of sites.

    Attributes:
        Ti: Mean daily temperature (degrees C).
        Tmini: Daily minimum temperature.
        Tmaxi: Daily maximum temperature.
        Li: Daylength, see ``daylength_unit``.
        Pi: Daily precipitation.
        VPDi: Vapour-pressure deficit.
        doy: Day-of-year label of every row. Negative values denote days
            before January 1st of the year in which the event occurs.
        transition_dates: Observed event DOY per site, only used by the
            null model.
        sites: Optional site labels.
        locations: Optional (lon, lat) per site.
        grid: Optional grid layout of the sites for raster output.
        daylength_unit: Unit of ``Li`` if known.
    """

    Ti: Optional[np.ndarray] = None
    Tmini: Optional[np.ndarray] = None
    Tmaxi: Optional[np.ndarray] = None
    Li: Optional[np.ndarray] = None
    Pi: Optional[np.ndarray] = None
    VPDi: Optional[np.ndarray] = None
    doy: np.ndarray
    transition_dates: Optional[np.ndarray] = None
    sites: Optional[Sequence] = None
    locations: Optional[np.ndarray] = None
    grid: Optional[GridLayout] = None
    daylength_unit: Optional[DaylengthUnit] = None

    @field_validator(*MATRIX_NAMES, mode="before")
    def _to_matrix(cls, values, info):
        if values is None:
            return None
        return as_matrix(values, info.field_name)

    @field_validator("doy", mode="before")
    def _to_doy(cls, values):
        doy = np.array(values, copy=True)
        assert doy.ndim == 1, "doy should be a 1D sequence"
        assert np.all(np.round(doy) == doy), "doy should hold whole days"
        doy = doy.astype(int)
        doy.setflags(write=False)
        return doy

    @field_validator("transition_dates", mode="before")
    def _to_dates(cls, values):
        if values is None:
            return None
        dates = np.array(values, dtype=float, copy=True).ravel()
        dates.setflags(write=False)
        return dates

    @field_validator("locations", mode="before")
    def _to_locations(cls, values):
        if values is None:
            return None
        locations = np.array(values, dtype=float, copy=True)
        assert (
            locations.ndim == 2 and locations.shape[1] == 2
        ), "locations should be a sequence of (lon, lat) pairs"
        locations.setflags(write=False)
        return locations

    @model_validator(mode="after")
    def _check_shapes(self):
        matrices = self.matrices()
        assert (
            matrices or self.transition_dates is not None
        ), "at least one driver matrix or transition_dates is required"

        n_sites = self.n_sites
        for name, matrix in matrices.items():
            assert matrix.shape == (
                len(self.doy),
                n_sites,
            ), f"{name} has shape {matrix.shape}, expected {(len(self.doy), n_sites)}"
            assert np.isfinite(matrix).all(), f"{name} contains missing values"

        if self.transition_dates is not None:
            assert len(self.transition_dates) == n_sites, (
                f"transition_dates has {len(self.transition_dates)} values "
                f"for {n_sites} sites"
            )
        if self.sites is not None:
            assert len(self.sites) == n_sites, "one label per site is required"
        if self.locations is not None:
            assert len(self.locations) == n_sites, "one location per site is required"
        if self.grid is not None:
            ny, nx = self.grid.shape
            assert ny * nx == n_sites, f"grid of {ny}x{nx} does not hold {n_sites} sites"
        return self

    def matrices(self) -> dict[str, np.ndarray]:
        """Driver matrices that are present, by name."""
        return {
            name: getattr(self, name)
            for name in MATRIX_NAMES
            if getattr(self, name) is not None
        }

    @property
    def n_sites(self) -> int:
        for matrix in self.matrices().values():
            return matrix.shape[1]
        return len(self.transition_dates)

    @property
    def n_days(self) -> int:
        return len(self.doy)

    def require(self, *names: str):
        """Raise ContractViolation if any of the named drivers is absent."""
        missing = [name for name in names if getattr(self, name) is None]
        if missing:
            raise ContractViolation(
                f"Not all required driver data is available, missing: {', '.join(missing)}"
            )

    def select_sites(self, index) -> "DriverData":
        """Return new driver data restricted to the given site columns.

        The grid layout is dropped as a subset of sites is no longer a grid.
        """
        index = np.asarray(index, dtype=int)
        fields = {name: matrix[:, index] for name, matrix in self.matrices().items()}
        if self.transition_dates is not None:
            fields["transition_dates"] = self.transition_dates[index]
        if self.sites is not None:
            fields["sites"] = [self.sites[i] for i in index]
        if self.locations is not None:
            fields["locations"] = self.locations[index]
        return DriverData(
            doy=self.doy, daylength_unit=self.daylength_unit, **fields
        )

    @classmethod
    def from_xarray(cls, ds: xr.Dataset, daylength_unit: DaylengthUnit | None = None):
        """Build driver data from an xarray dataset.

        The dataset should have a ``time`` dimension with a ``doy``
        coordinate and either a ``site`` dimension or ``y`` and ``x``
        dimensions. Gridded data is stacked row-major into site columns and
        the grid layout is kept for raster output. Site coordinates ``lon``
        and ``lat`` are used as locations when present.
        """
        grid = None
        if "site" not in ds.dims and {"x", "y"} <= set(ds.dims):
            grid = GridLayout(x=ds["x"].values.tolist(), y=ds["y"].values.tolist())
            ds = ds.stack(site=("y", "x"))

        fields = {}
        for name in MATRIX_NAMES:
            if name in ds.data_vars:
                fields[name] = ds[name].transpose("time", "site").values
        if "transition_dates" in ds.data_vars:
            fields["transition_dates"] = ds["transition_dates"].values

        if grid is None:
            fields["sites"] = ds["site"].values.tolist()
            if "lon" in ds.coords and "lat" in ds.coords:
                fields["locations"] = np.column_stack(
                    [ds["lon"].values, ds["lat"].values]
                )

        logger.debug(f"Driver data with variables {list(fields)} from dataset")
        return cls(doy=ds["doy"].values, grid=grid, daylength_unit=daylength_unit, **fields)
