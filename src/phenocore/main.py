# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
import logging
from datetime import datetime
from pathlib import Path
from tempfile import gettempdir
from typing import Any, Optional, Sequence

import click
import xarray as xr
import yaml
from pydantic import BaseModel, field_validator

from phenocore.config import CONFIG, OutputFormat
from phenocore.config import Config as PhenocoreConfig
from phenocore.data import DaylengthUnit, DriverData
from phenocore.models import PHENOLOGY_MODELS, evaluate
from phenocore.output import shape_model_output

logger = logging.getLogger(__name__)


class Session(BaseModel, validate_default=True):
    """Session for evaluating a recipe."""

    output_dir: Path = Path(gettempdir()) / "output"

    @field_validator("output_dir")
    def _make_dir(cls, path):
        """Create dirs if they don't exist yet."""
        if not path.exists():
            print(f"Creating folder {path}")
            path.mkdir(parents=True)
        return path

    @classmethod
    def for_recipe(
        cls,
        recipe: Path,
        output_dir: Path | None = None,
        config: PhenocoreConfig = CONFIG,
    ) -> "Session":
        if output_dir is None:
            now = datetime.now().strftime("%Y%m%d-%H%M%S")
            output_dir = config.output_root_dir / f"phenocore-{recipe.stem}-{now}"
        return cls(output_dir=output_dir)


class Recipe(BaseModel):
    """A model run: which model, with which parameters, on which drivers.

    Attributes:
        model: Name of a model in the catalog.
        parameters: Parameter vector of the model.
        drivers: netCDF file with the driver variables, see
            :meth:`phenocore.data.DriverData.from_xarray`.
        daylength_unit: Unit of the daylength variable, if known.
        output: Representation in which the prediction is saved.
        options: Extra keyword arguments of the model.
    """

    model: str
    parameters: Sequence[float] = ()
    drivers: Path
    daylength_unit: Optional[DaylengthUnit] = None
    output: OutputFormat = "series"
    options: dict[str, Any] = {}

    @field_validator("model")
    def _known_model(cls, name):
        assert name in PHENOLOGY_MODELS, f"{name} is not one of {list(PHENOLOGY_MODELS)}"
        return name

    @classmethod
    def from_recipe(cls, recipe: Path):
        with open(recipe, "r") as raw_recipe:
            options = yaml.safe_load(raw_recipe)

        return cls(**options)

    def save_recipe(self, path: Path):
        """Save the recipe as a recipe file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, sort_keys=False)

    def execute(self, session: Session) -> Path:
        """Load drivers, evaluate the model and save the prediction."""
        self.save_recipe(session.output_dir / "recipe.yaml")

        with xr.open_dataset(self.drivers) as ds:
            data = DriverData.from_xarray(ds.load(), daylength_unit=self.daylength_unit)
        logger.info(f"Driver data loaded: {data.n_days} days for {data.n_sites} sites")

        doy = evaluate(self.model, self.parameters, data, **self.options)
        result = shape_model_output(data, doy, self.output)

        if self.output == "raster":
            result_fn = session.output_dir / "doy.nc"
            result.to_netcdf(result_fn)
        else:
            result_fn = session.output_dir / "doy.csv"
            if self.output == "vector":
                result = shape_model_output(data, doy, "series")
            result.to_csv(result_fn)
        logger.info(f"Prediction saved to: {result_fn}")
        return result_fn


def main(recipe, output_dir: Optional[Path]):
    session = Session.for_recipe(recipe, output_dir)

    return Recipe.from_recipe(recipe).execute(session)


@click.group()
def cli():
    """Evaluate phenology models."""
    logging.basicConfig(level=logging.INFO)


@cli.command()
def models():
    """List the available models and their parameters."""
    for name, model in PHENOLOGY_MODELS.items():
        click.echo(
            f"{name:6} {model.arity:3}  {', '.join(model.drivers):24} "
            f"{', '.join(model.params_names)}"
        )


@cli.command()
@click.argument("recipe", type=click.Path(exists=True, path_type=Path))
@click.option("--output-dir", default=None, type=click.Path(path_type=Path))
@click.option(
    "--output-root-dir", default=CONFIG.output_root_dir, type=click.Path(path_type=Path)
)
@click.option("--n-jobs", default=CONFIG.n_jobs, type=click.IntRange(min=1))
def run(
    recipe: Path,
    output_dir: Optional[Path],
    output_root_dir: Path,
    n_jobs: int,
):
    """Evaluate the model described in RECIPE."""
    CONFIG.output_root_dir = output_root_dir
    CONFIG.n_jobs = n_jobs
    try:
        main(recipe, output_dir)
    except Exception:
        logger.exception(f"Evaluation of {recipe} failed")
        raise


if __name__ == "__main__":
    cli()
