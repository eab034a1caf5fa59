# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, PositiveInt, field_validator

OutputFormat = Literal["vector", "series", "raster", "points"]
"""Representations produced by :func:`phenocore.output.shape_model_output`."""


class Config(BaseModel, validate_assignment=True, validate_default=True):
    """Runtime settings.

    Attributes:
        n_jobs: Number of threads over which site columns are split.
        search_block_rows: Number of start rows scanned at once by the
            early-exit window search.
        output_format: Default representation of model output.
        output_root_dir: Folder in which CLI sessions are created.
    """

    n_jobs: PositiveInt = 1
    search_block_rows: PositiveInt = 32
    output_format: OutputFormat = "vector"
    output_root_dir: Path = Path(".")

    @field_validator("output_root_dir")
    def _make_dir(cls, path):
        """Create dirs if they don't exist yet."""
        if not path.exists():
            print(f"Creating folder {path}")
            path.mkdir(parents=True)
        return path


CONFIG = Config()
