# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
from contextlib import contextmanager

import numpy as np
import pytest

from phenocore.config import CONFIG
from phenocore.data import DriverData
from phenocore.dummy import generate_drivers


### Temporarily change the configuration


@pytest.fixture
def temporary_config():
    """Temporarily change settings in config."""

    @contextmanager
    def context_manager(**settings):
        old_settings = {name: getattr(CONFIG, name) for name in settings}
        for name, value in settings.items():
            setattr(CONFIG, name, value)
        try:
            yield CONFIG
        finally:
            for name, value in old_settings.items():
                setattr(CONFIG, name, value)

    return context_manager


### Driver data


@pytest.fixture
def drivers():
    """A year of random drivers for 12 sites, starting in September."""
    return generate_drivers(n_sites=12, seed=42)


@pytest.fixture
def constant_drivers():
    """Build driver data with constant matrices, DOY labels 1..n_days."""

    def make(n_days=365, n_sites=1, doy=None, **values):
        if doy is None:
            doy = np.arange(1, n_days + 1)
        matrices = {
            name: np.full((len(doy), n_sites), value, dtype=float)
            for name, value in values.items()
        }
        return DriverData(doy=doy, **matrices)

    return make


@pytest.fixture
def chill_then_warm():
    """Sixty days at 2 degrees followed by warm days at 15 degrees."""
    Ti = np.full((200, 1), 15.0)
    Ti[:60] = 2.0
    return DriverData(Ti=Ti, Li=np.full((200, 1), 12.0), doy=np.arange(1, 201))
