"""
Basic Usage Examples
====================

This module demonstrates basic usage patterns for the dotfonts provisioner.
"""

from pathlib import Path

from src.dotfonts.core.config import ProvisionerConfig
from src.dotfonts.core.exceptions import WorkspaceError
from src.dotfonts.fonts.catalog import FontCatalog, resolve_asset_name
from src.dotfonts.fonts.downloader import create_session
from src.dotfonts.fonts.provisioner import ConsoleProgressCallback, FontProvisioner


def example_default_provisioning():
    """
    Install the default families into the platform font directory.
    """
    print("=== Default Provisioning ===")

    config = ProvisionerConfig.from_env_and_yaml()

    try:
        with FontProvisioner(config, progress_callback=ConsoleProgressCallback()) as provisioner:
            report = provisioner.provision()
    except WorkspaceError as e:
        print(f"❌ Could not prepare directories: {e}")
        return

    for result in report.get_failed_items():
        print(f"   {result.name}: {result.reason.value} ({result.error})")
    print(f"   Default font: {report.default_font_outcome.value}")


def example_custom_configuration():
    """
    Install a custom list into a private subdirectory without touching the desktop.
    """
    print("\n=== Custom Configuration ===")

    config = ProvisionerConfig(
        families=["Hack", "FiraCode"],
        default_font=None,
        dest_dir=Path("~/.local/share/fonts/nerd-fonts"),
        show_progress=True,
    )

    with FontProvisioner(config) as provisioner:
        report = provisioner.provision()

    print(f"✅ {report.installed_files} font file(s) in {report.destination}")


def example_yaml_configuration():
    """
    Load settings from a YAML file.
    """
    print("\n=== YAML Configuration ===")

    config = ProvisionerConfig.from_env_and_yaml("configs/fonts.yaml")
    print(f"Families: {', '.join(config.families)}")
    print(f"Destination: {config.dest_dir}")


def example_resolve_names():
    """
    Look up release asset names without installing anything.
    """
    print("\n=== Resolve Asset Names ===")

    config = ProvisionerConfig()
    session = create_session(config.user_agent)
    try:
        catalog = FontCatalog.fetch(session, config.catalog_url, config.timeout_seconds)
    finally:
        session.close()

    for name in config.families:
        print(f"   {name} -> {resolve_asset_name(name, catalog)}")


if __name__ == "__main__":
    example_yaml_configuration()
    example_resolve_names()
    example_custom_configuration()
    example_default_provisioning()
