#!/usr/bin/env python3
"""
Main CLI for dotfonts
=====================

This CLI installs Nerd Fonts families, refreshes the font cache and applies
a desktop default font.
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from src.dotfonts.core.config import ProvisionerConfig
    from src.dotfonts.core.exceptions import ConfigLoadError, DotfontsError
    from src.dotfonts.fonts.catalog import resolve_asset_name
    from src.dotfonts.fonts.downloader import find_font_files
    from src.dotfonts.fonts.provisioner import ConsoleProgressCallback, FontProvisioner
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)


def _build_config(config_path: Path | None, **overrides) -> ProvisionerConfig:
    """Load configuration from env/.env/YAML and apply command-line overrides."""
    base = ProvisionerConfig.from_env_and_yaml(yaml_path=config_path)
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return base
    data = base.model_dump()
    data.update(updates)
    try:
        return ProvisionerConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(str(e)) from e


def _apply_log_level(ctx: click.Context, config: ProvisionerConfig) -> None:
    if not ctx.obj.get("verbose"):
        logging.getLogger().setLevel(config.log_level.upper())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, verbose):
    """Font provisioning CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command(name="install")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file",
)
@click.option("--font", "-f", "fonts", multiple=True, help="Font family to install (repeatable)")
@click.option("--default-font", "-d", type=str, help="Family to apply as desktop default")
@click.option("--no-default", is_flag=True, help="Do not change the desktop default font")
@click.option("--dest", type=click.Path(file_okay=False, path_type=Path), help="Destination dir")
@click.option("--size", type=int, help="Point size for the desktop font")
@click.option("--no-catalog", is_flag=True, help="Use family names verbatim as asset names")
@click.option("--progress-bars", is_flag=True, help="Show download progress bars")
@click.option("--no-spinner", is_flag=True, help="Disable the progress spinner")
@click.option(
    "--report",
    "-r",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a JSON report of the run to this file",
)
@click.pass_context
def install(
    ctx,
    config,
    fonts,
    default_font,
    no_default,
    dest,
    size,
    no_catalog,
    progress_bars,
    no_spinner,
    report,
):
    """Download and install font families."""
    try:
        provisioner_config = _build_config(
            config,
            families=list(fonts) or None,
            default_font="" if no_default else default_font,
            dest_dir=dest,
            font_size=size,
            use_catalog=False if no_catalog else None,
            show_progress=True if progress_bars else None,
            show_spinner=False if no_spinner else None,
        )
        _apply_log_level(ctx, provisioner_config)

        with FontProvisioner(
            provisioner_config, progress_callback=ConsoleProgressCallback()
        ) as provisioner:
            result = provisioner.provision()

        if result.failed_items > 0:
            logger.warning(f"Failed items: {result.failed_items}")
            for failed_result in result.get_failed_items():
                logger.warning(f"  - {failed_result.name}: {failed_result.error}")

        if report:
            with open(report, "w") as f:
                json.dump(result.to_dict(), f, indent=2)
            logger.info(f"Report written to {report}")

    except DotfontsError as e:
        logger.exception(f"Font installation failed: {e}")
        sys.exit(1)


@cli.command(name="resolve")
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file",
)
@click.option("--no-catalog", is_flag=True, help="Use family names verbatim as asset names")
def resolve(names, config, no_catalog):
    """Show which release asset each family name resolves to."""
    try:
        provisioner_config = _build_config(config, use_catalog=False if no_catalog else None)
        with FontProvisioner(provisioner_config) as provisioner:
            catalog = provisioner.load_catalog()
            for name in names:
                asset_name = resolve_asset_name(name, catalog)
                url = provisioner.resolve_url(name, catalog)
                click.echo(f"{name} -> {asset_name} ({url})")
    except DotfontsError as e:
        logger.exception(f"Resolution failed: {e}")
        sys.exit(1)


@cli.command(name="list")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file",
)
@click.option("--dest", type=click.Path(file_okay=False, path_type=Path), help="Destination dir")
def list_fonts(config, dest):
    """List installed font files."""
    try:
        provisioner_config = _build_config(config, dest_dir=dest)
        dest_dir = provisioner_config.dest_dir

        if not dest_dir.is_dir():
            click.echo(f"No fonts installed: {dest_dir} does not exist")
            return

        font_files = find_font_files(dest_dir, provisioner_config.font_extensions)
        click.echo(f"{len(font_files)} font file(s) in {dest_dir}")
        for font_file in font_files:
            click.echo(f"  {font_file.relative_to(dest_dir)}")
    except DotfontsError as e:
        logger.exception(f"Listing failed: {e}")
        sys.exit(1)


@cli.command(name="apply-default")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file",
)
@click.option("--default-font", "-d", type=str, help="Family to apply as desktop default")
@click.option("--dest", type=click.Path(file_okay=False, path_type=Path), help="Destination dir")
@click.option("--size", type=int, help="Point size for the desktop font")
def apply_default(config, default_font, dest, size):
    """Apply an installed family as the desktop default font."""
    try:
        provisioner_config = _build_config(
            config, default_font=default_font, dest_dir=dest, font_size=size
        )
        with FontProvisioner(provisioner_config) as provisioner:
            outcome = provisioner.apply_default_font()
        click.echo(f"Default font: {outcome.value}")
    except DotfontsError as e:
        logger.exception(f"Applying default font failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
