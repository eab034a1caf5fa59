# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
from .evaluate import evaluate, get_model
from .phenology_models import NO_EVENT, PHENOLOGY_MODELS

__all__ = ["evaluate", "get_model", "NO_EVENT", "PHENOLOGY_MODELS"]
