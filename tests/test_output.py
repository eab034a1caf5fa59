# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
import xarray as xr
from numpy.testing import assert_array_equal
from shapely.geometry import Point

from phenocore.data import DriverData
from phenocore.dummy import generate_drivers
from phenocore.models import NO_EVENT
from phenocore.output import shape_model_output
from phenocore.utils import ContractViolation


@pytest.fixture
def gridded():
    return generate_drivers(n_sites=4, seed=1, grid=True)


def test_vector(drivers):
    doy = np.arange(drivers.n_sites)
    result = shape_model_output(drivers, doy, "vector")
    assert isinstance(result, np.ndarray)
    assert_array_equal(result, doy)


def test_default_from_config(drivers, temporary_config):
    doy = np.arange(drivers.n_sites)
    with temporary_config(output_format="series"):
        assert isinstance(shape_model_output(drivers, doy), pd.Series)


def test_series(drivers):
    doy = np.arange(drivers.n_sites)
    result = shape_model_output(drivers, doy, "series")
    assert result.name == "doy"
    assert result.index.name == "site"
    assert result["site-2"] == 2


def test_series_without_labels():
    data = DriverData(Ti=np.ones((5, 3)), doy=np.arange(5))
    result = shape_model_output(data, [1, 2, 3], "series")
    assert list(result.index) == [0, 1, 2]


def test_raster(gridded):
    doy = np.array([100, 110, NO_EVENT, 130])
    result = shape_model_output(gridded, doy, "raster")
    assert isinstance(result, xr.DataArray)
    assert result.dims == ("y", "x")
    assert result.shape == (1, 4)
    assert result.sel(y=0, x=2) == NO_EVENT
    assert result.attrs["no_event"] == NO_EVENT


def test_raster_requires_grid(drivers):
    with pytest.raises(ContractViolation, match="grid"):
        shape_model_output(drivers, np.zeros(drivers.n_sites), "raster")


def test_points(drivers):
    doy = np.arange(drivers.n_sites)
    result = shape_model_output(drivers, doy, "points")
    assert isinstance(result, gpd.GeoDataFrame)
    assert result.crs.to_epsg() == 4326
    assert result.geometry.iloc[5] == Point(drivers.locations[5])
    assert result.loc["site-5", "doy"] == 5


def test_points_require_locations():
    data = DriverData(Ti=np.ones((5, 3)), doy=np.arange(5))
    with pytest.raises(ContractViolation, match="locations"):
        shape_model_output(data, [1, 2, 3], "points")


def test_length_mismatch(drivers):
    with pytest.raises(ContractViolation):
        shape_model_output(drivers, [1, 2], "vector")


def test_unknown_format(drivers):
    with pytest.raises(ContractViolation, match="Unknown output format"):
        shape_model_output(drivers, np.zeros(drivers.n_sites), "table")
