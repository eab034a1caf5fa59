# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
import numpy as np

from phenocore.data import DriverData, GridLayout


def daylength(doy, latitude):
    """Astronomical daylength in hours for DOY labels and latitudes (degrees)."""
    doy = np.mod(np.asarray(doy, dtype=float)[:, np.newaxis], 365)
    latitude = np.radians(np.asarray(latitude, dtype=float))
    declination = np.radians(23.44) * np.sin(2 * np.pi * (284 + doy) / 365)
    cos_hour_angle = np.clip(-np.tan(latitude) * np.tan(declination), -1, 1)
    return 24 / np.pi * np.arccos(cos_hour_angle)


def generate_drivers(n_sites=10, first_doy=-110, last_doy=250, seed=None, grid=False):
    """Generate random but seasonally plausible driver data for testing.

    Rows run from ``first_doy`` to ``last_doy``, days before January 1st
    being negative. With ``grid=True`` the sites are laid out on a single
    row grid so raster output can be produced.
    """
    rng = np.random.default_rng(seed)
    doy = np.arange(first_doy, last_doy + 1)
    n_days = len(doy)

    latitude = rng.uniform(35, 60, size=n_sites)
    longitude = rng.uniform(-10, 30, size=n_sites)

    annual_mean = 15 - 0.4 * (latitude - 35)
    season = -np.cos(2 * np.pi * (doy[:, np.newaxis] + 10) / 365)
    Ti = annual_mean + 10 * season + rng.normal(0, 2.5, size=(n_days, n_sites))
    Tmini = Ti - rng.uniform(3, 7, size=(n_days, n_sites))
    Tmaxi = 2 * Ti - Tmini

    # saturation vapour pressure (Pa) and a random relative humidity
    saturation = 610.8 * np.exp(17.27 * Ti / (Ti + 237.3))
    VPDi = saturation * rng.uniform(0.1, 0.6, size=(n_days, n_sites))

    wet = rng.random((n_days, n_sites)) < 0.3
    Pi = np.where(wet, np.round(rng.gamma(0.8, 6, size=(n_days, n_sites)), 1), 0.0)

    return DriverData(
        Ti=Ti,
        Tmini=Tmini,
        Tmaxi=Tmaxi,
        Li=daylength(doy, latitude),
        Pi=Pi,
        VPDi=VPDi,
        doy=doy,
        transition_dates=rng.integers(100, 150, size=n_sites),
        sites=[f"site-{i}" for i in range(n_sites)],
        locations=np.column_stack([longitude, latitude]),
        grid=GridLayout(x=list(range(n_sites)), y=[0]) if grid else None,
        daylength_unit="hours",
    )
