# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from phenocore.data import DriverData
from phenocore.models import NO_EVENT, PHENOLOGY_MODELS, evaluate
from phenocore.utils import ContractViolation

MODEL_NAMES = list(PHENOLOGY_MODELS)


def test_catalog_names():
    expected = set(
        "TT TTs PTT PTTs M1 M1s CDD SQ SQb SM1 SM1b PA PAb PM1 PM1b UN UM1 AT "
        "DP SGSI AGSI DU CU GRP LIN null".split()
    )
    assert set(MODEL_NAMES) == expected


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_defaults_match_parameter_names(name):
    model = PHENOLOGY_MODELS[name]
    assert len(model.params_defaults) == model.arity


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_one_value_per_site(name, drivers):
    model = PHENOLOGY_MODELS[name]
    result = evaluate(name, model.params_defaults, drivers)
    assert result.shape == (drivers.n_sites,)
    assert not np.isnan(result).any()
    if name != "LIN":
        # a DOY label of the series or no event
        assert np.isin(result, np.append(drivers.doy, NO_EVENT)).all()


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_wrong_number_of_parameters(name, drivers):
    model = PHENOLOGY_MODELS[name]
    with pytest.raises(ContractViolation):
        evaluate(name, tuple(model.params_defaults) + (1,), drivers)


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_sites_are_independent(name, drivers):
    model = PHENOLOGY_MODELS[name]
    order = np.random.default_rng(0).permutation(drivers.n_sites)
    result = evaluate(name, model.params_defaults, drivers)
    permuted = evaluate(name, model.params_defaults, drivers.select_sites(order))
    if model.column_independent:
        assert_allclose(permuted, result[order])
    else:
        assert_allclose(np.sort(permuted), np.sort(result))


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_parallel_matches_serial(name, drivers):
    model = PHENOLOGY_MODELS[name]
    serial = evaluate(name, model.params_defaults, drivers, n_jobs=1)
    for n_jobs in (1, 2, 4, 5):
        parallel = evaluate(name, model.params_defaults, drivers, n_jobs=n_jobs)
        assert_array_equal(parallel, serial)


@pytest.mark.parametrize(
    "name, missing",
    [
        (name, driver)
        for name, model in PHENOLOGY_MODELS.items()
        for driver in model.drivers
    ],
)
def test_missing_driver(name, missing, drivers):
    fields = dict(drivers.matrices(), transition_dates=drivers.transition_dates)
    del fields[missing]
    data = DriverData(doy=drivers.doy, **fields)
    with pytest.raises(ContractViolation, match=missing):
        evaluate(name, PHENOLOGY_MODELS[name].params_defaults, data)


@pytest.mark.parametrize(
    "name", [name for name, model in PHENOLOGY_MODELS.items() if model.daylength_unit]
)
def test_daylength_unit_mismatch(name, drivers):
    data = drivers.model_copy(update={"daylength_unit": "decihours"})
    with pytest.raises(ContractViolation, match="daylength"):
        evaluate(name, PHENOLOGY_MODELS[name].params_defaults, data)


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_drivers_are_not_modified(name, drivers):
    before = {key: matrix.copy() for key, matrix in drivers.matrices().items()}
    evaluate(name, PHENOLOGY_MODELS[name].params_defaults, drivers, n_jobs=3)
    for key, matrix in drivers.matrices().items():
        assert_array_equal(matrix, before[key])
        assert not matrix.flags.writeable


@pytest.mark.parametrize("name", MODEL_NAMES)
def test_daylength_unit_declared_for_daylength_drivers(name):
    model = PHENOLOGY_MODELS[name]
    assert (model.daylength_unit is not None) == ("Li" in model.drivers)


@pytest.mark.parametrize(
    "name, position, value",
    [
        (name, position, value)
        for name, model in PHENOLOGY_MODELS.items()
        for position in range(model.arity)
        for value in (np.nan, np.inf, -np.inf)
    ],
)
def test_non_finite_parameters(name, position, value, drivers):
    params = list(PHENOLOGY_MODELS[name].params_defaults)
    params[position] = value
    with pytest.raises(ContractViolation, match="finite"):
        evaluate(name, params, drivers)


# models whose event is a DOY label of the driver series
SERIES_MODELS = [name for name in MODEL_NAMES if name not in ("LIN", "null")]


@pytest.mark.parametrize("name", SERIES_MODELS)
def test_empty_series_gives_no_event(name, drivers):
    fields = {key: matrix[:0] for key, matrix in drivers.matrices().items()}
    data = DriverData(doy=drivers.doy[:0], daylength_unit="hours", **fields)
    result = evaluate(name, PHENOLOGY_MODELS[name].params_defaults, data)
    assert_array_equal(result, [NO_EVENT] * drivers.n_sites)
