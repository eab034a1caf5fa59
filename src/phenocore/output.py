# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Reshape predicted DOYs into the representation the caller asked for."""

import logging

import geopandas as gpd
import numpy as np
import pandas as pd
import xarray as xr

from phenocore.config import CONFIG, OutputFormat
from phenocore.data import DriverData
from phenocore.models import NO_EVENT
from phenocore.utils import ContractViolation

logger = logging.getLogger(__name__)


def shape_model_output(data: DriverData, doy, output: OutputFormat | None = None):
    """Return doy as vector, series, raster or points.

    Args:
        data: The driver data the prediction was made for. Its site labels,
            grid layout or locations determine the shape of the output.
        doy: One predicted DOY per site.
        output: One of ``"vector"`` (numpy array), ``"series"`` (pandas
            series indexed by site), ``"raster"`` (xarray DataArray on the
            driver grid) or ``"points"`` (GeoDataFrame with site locations).
            Defaults to ``CONFIG.output_format``.
    """
    if output is None:
        output = CONFIG.output_format
    doy = np.asarray(doy, dtype=float)
    if len(doy) != data.n_sites:
        raise ContractViolation(f"{len(doy)} predictions for {data.n_sites} sites")

    if output == "vector":
        return doy

    if output == "series":
        index = pd.Index(data.sites, name="site") if data.sites is not None else None
        return pd.Series(doy, index=index, name="doy")

    if output == "raster":
        if data.grid is None:
            raise ContractViolation("Raster output requires driver data on a grid")
        return xr.DataArray(
            doy.reshape(data.grid.shape),
            coords={"y": list(data.grid.y), "x": list(data.grid.x)},
            dims=("y", "x"),
            name="doy",
            attrs={"no_event": NO_EVENT},
        )

    if output == "points":
        if data.locations is None:
            raise ContractViolation("Point output requires site locations")
        return gpd.GeoDataFrame(
            {"doy": doy},
            index=pd.Index(data.sites, name="site") if data.sites is not None else None,
            geometry=gpd.points_from_xy(data.locations[:, 0], data.locations[:, 1]),
            crs="EPSG:4326",
        )

    raise ContractViolation(f"Unknown output format {output}")
