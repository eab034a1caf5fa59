# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Common interface for phenology models."""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from phenocore.utils import ContractViolation


@dataclass
class PhenologyModel:
    """A named configuration of the shared evaluation building blocks.

    ``predict`` is called as ``predict(data, *params)`` and returns one
    value per site. ``daylength_unit`` is the unit in which a model that
    reads ``Li`` expects it, None for models without daylength driver.
    """

    name: str
    predict: Callable
    params_names: tuple[str, ...]
    params_defaults: tuple[float, ...]
    drivers: tuple[str, ...]
    daylength_unit: str | None = None
    column_independent: bool = True
    description: str = ""

    @property
    def arity(self) -> int:
        return len(self.params_names)

    def check(self, params, data):
        """Raise ContractViolation if params or data do not fit this model."""
        if len(params) != self.arity:
            raise ContractViolation(
                f"{self.name} takes {self.arity} parameters "
                f"({', '.join(self.params_names)}), {len(params)} provided"
            )
        values = np.asarray(params, dtype=float)
        if not np.isfinite(values).all():
            bad = [n for n, v in zip(self.params_names, values) if not np.isfinite(v)]
            raise ContractViolation(
                f"{self.name} parameters should be finite, got {', '.join(bad)}"
            )
        data.require(*self.drivers)
        if (
            self.daylength_unit is not None
            and data.daylength_unit is not None
            and data.daylength_unit != self.daylength_unit
        ):
            raise ContractViolation(
                f"{self.name} expects daylength in {self.daylength_unit}, "
                f"driver data holds {data.daylength_unit}"
            )

    def __call__(self, params, data, **options):
        self.check(params, data)
        params = [float(p) for p in params]
        return np.asarray(self.predict(data, *params, **options), dtype=float)
