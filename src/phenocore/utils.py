# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
from logging import getLogger

import numpy as np

logger = getLogger(__name__)


class ContractViolation(ValueError):
    """Invalid call into a phenology model.

    Raised for a parameter vector of the wrong length, a missing driver
    matrix, an unknown model name or a parameter combination for which the
    model formulas are numerically undefined.
    """

    pass


def as_matrix(values, name: str = "values") -> np.ndarray:
    """Return a read-only float copy of values with shape (time, site).

    This allows us to pass both 1D and 2D arrays: a 1D series is treated as
    a single site column.
    """
    matrix = np.array(values, dtype=float, copy=True)
    if matrix.ndim == 1:
        matrix = matrix[:, np.newaxis]
    if matrix.ndim != 2:
        raise ValueError(f"{name} should be a (time, site) matrix, got {matrix.ndim}D")
    matrix.setflags(write=False)
    return matrix


def ensure_defined(series: np.ndarray, what: str = "series"):
    """Raise ContractViolation if series contains NaN.

    Driver matrices are validated finite, so a NaN can only come from a
    degenerate parameter combination.
    """
    if np.isnan(series).any():
        raise ContractViolation(
            f"{what} is undefined (NaN) for this parameter combination"
        )
    return series
