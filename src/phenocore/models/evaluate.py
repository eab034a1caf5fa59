# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from phenocore.config import CONFIG
from phenocore.data import DriverData
from phenocore.utils import ContractViolation

from .phenology_models import NO_EVENT, PHENOLOGY_MODELS, PhenologyModel

logger = logging.getLogger(__name__)


def get_model(name: str) -> PhenologyModel:
    """Look up a model in the catalog."""
    try:
        return PHENOLOGY_MODELS[name]
    except KeyError:
        raise ContractViolation(
            f"{name} is not a known model! Choose one of {list(PHENOLOGY_MODELS)}"
        ) from None


def evaluate(
    model_name: str,
    parameters: Sequence[float],
    data: DriverData,
    n_jobs: int | None = None,
    **options,
) -> np.ndarray:
    """Predict the event DOY of every site.

    Args:
        model_name: Name of a model in ``PHENOLOGY_MODELS``.
        parameters: Parameter vector, its length must match the model.
        data: Driver data for all sites.
        n_jobs: Number of threads over which site columns are split.
            Defaults to ``CONFIG.n_jobs``. Models that combine all sites
            always run in one piece.
        options: Extra keyword arguments of the model, e.g. ``spring`` for
            the linear model.

    Returns:
        One value per site, ``NO_EVENT`` where the event is never triggered.

    Raises:
        ContractViolation: for an unknown model, wrong number of parameters,
            missing drivers or degenerate parameter values.
    """
    model = get_model(model_name)
    model.check(parameters, data)
    if n_jobs is None:
        n_jobs = CONFIG.n_jobs
    n_jobs = min(n_jobs, data.n_sites)

    if n_jobs <= 1 or not model.column_independent:
        logger.debug(f"Evaluating {model.name} for {data.n_sites} sites")
        doy = model(parameters, data, **options)
    else:
        chunks = np.array_split(np.arange(data.n_sites), n_jobs)
        logger.debug(
            f"Evaluating {model.name} for {data.n_sites} sites in {len(chunks)} chunks"
        )
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            futures = [
                executor.submit(model, parameters, data.select_sites(chunk), **options)
                for chunk in chunks
            ]
            doy = np.concatenate([future.result() for future in futures])

    logger.debug(f"{model.name}: event triggered at {np.sum(doy != NO_EVENT)} sites")
    doy.setflags(write=False)
    return doy
