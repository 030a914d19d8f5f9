"""Command-line interface for cqrsgen."""

import logging
import os
import sys
from pathlib import Path

import click

from . import __version__
from .config.errors import ConfigLoadError, ConfigValidationError
from .config.loader import find_config_file, load_config
from .config.models import GeneratorConfig
from .errors import CqrsGenError
from .generator import default_reader, describe_models, generate_api
from .observability.logging_config import resolve_level, setup_logging
from .output.formatter import format_descriptions, format_validation_result
from .parsing.errors import SourceModuleNotFoundError
from .validators.runner import check_model_files

logger = logging.getLogger(__name__)


def _load_config(config_path: str | None) -> GeneratorConfig:
    """Load the given configuration, or the nearest cqrsgen.yaml, or defaults."""
    path = config_path or find_config_file()
    if path is None:
        logger.debug("No configuration file found, using defaults")
        return GeneratorConfig()
    logger.info("Using configuration %s", path)
    return load_config(path)


def _model_paths(config: GeneratorConfig, model_files: tuple[str, ...]) -> list[str]:
    """Model paths from the command line, made relative to the config directory.

    Falls back to the configured models when none are given.
    """
    if not model_files:
        return list(config.models)
    if config.base_dir is None:
        return list(model_files)
    return [os.path.relpath(Path(p).resolve(), config.base_dir) for p in model_files]


def _fail_on_load_error(e: Exception) -> None:
    click.echo(f"Error loading file: {e}", err=True)
    sys.exit(2)


@click.group()
@click.version_option(version=__version__, prog_name="cqrsgen")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to cqrsgen.yaml (default: search upward from the working directory)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log progress (INFO)")
@click.option("--debug", is_flag=True, help="Log everything (DEBUG)")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool, debug: bool, quiet: bool):
    """cqrsgen: generate a Command/Query dispatch API from domain model modules."""
    setup_logging(resolve_level(verbose=verbose, debug=debug, quiet=quiet))

    try:
        config = _load_config(config_path)
    except ConfigLoadError as e:
        _fail_on_load_error(e)
    except ConfigValidationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)

    ctx.obj = config


@main.command()
@click.argument("model_files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--lifecycle",
    "lifecycle_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Module holding the lifecycle class (default: 'lifecycle' from the config)",
)
@click.option(
    "--output",
    "output_file",
    default=None,
    help="File to write the generated module to, '-' for stdout "
    "(default: 'output' from the config, else stdout)",
)
@click.pass_obj
def generate(
    config: GeneratorConfig,
    model_files: tuple[str, ...],
    lifecycle_file: str | None,
    output_file: str | None,
):
    """Generate the API and splice it into the lifecycle module.

    MODEL_FILES are the domain model modules, in API order.

    Exit codes:
      0 - Success
      1 - The models violate the conventions
      2 - File or configuration error
    """
    reader = default_reader(config)
    paths = _model_paths(config, model_files)

    try:
        if lifecycle_file:
            lifecycle_path = lifecycle_file
            lifecycle_source = reader.read(Path(lifecycle_file).resolve())
        elif config.lifecycle:
            lifecycle_path = config.lifecycle
            lifecycle_source = reader.read(config.lifecycle)
        else:
            click.echo(
                "Error: no lifecycle module given. Use --lifecycle or set 'lifecycle' "
                "in cqrsgen.yaml.",
                err=True,
            )
            sys.exit(2)

        output = generate_api(lifecycle_source, paths, config, reader, lifecycle_path)
    except SourceModuleNotFoundError as e:
        _fail_on_load_error(e)
    except CqrsGenError as e:
        click.echo(f"Generation failed [{e.code}]: {e}", err=True)
        sys.exit(1)

    target = output_file or config.output
    if target is None or target == "-":
        click.echo(output, nl=False)
    else:
        target_path = reader.resolve(target) if output_file is None else Path(target)
        target_path.write_text(output, encoding="utf-8")
        click.echo(f"Generated: {target_path}", err=True)
    sys.exit(0)


@main.command()
@click.argument("model_files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
@click.pass_obj
def check(config: GeneratorConfig, model_files: tuple[str, ...], output_format: str, strict: bool):
    """Check model modules without generating code.

    MODEL_FILES are the domain model modules (default: 'models' from the config).

    Exit codes:
      0 - Check passed
      1 - Check failed (errors found)
    """
    result = check_model_files(_model_paths(config, model_files), config)

    output = format_validation_result(result, output_format)  # type: ignore
    click.echo(output)

    sys.exit(1 if result.failed(strict) else 0)


@main.command()
@click.argument("model_files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def describe(config: GeneratorConfig, model_files: tuple[str, ...]):
    """Print what the generator sees in each model module, as YAML.

    Exit codes:
      0 - Success
      1 - The models violate the conventions
      2 - File error
    """
    try:
        descriptions = describe_models(_model_paths(config, model_files), config)
    except SourceModuleNotFoundError as e:
        _fail_on_load_error(e)
    except CqrsGenError as e:
        click.echo(f"Analysis failed [{e.code}]: {e}", err=True)
        sys.exit(1)

    click.echo(format_descriptions(descriptions), nl=False)
    sys.exit(0)


if __name__ == "__main__":
    main()
