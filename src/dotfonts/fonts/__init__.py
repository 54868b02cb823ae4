"""Font Provisioning Module
========================

Catalog lookup, asset download and installation of font families.
"""

from .catalog import FontCatalog, resolve_asset_name
from .downloader import AssetDownloader, extract_archive, find_installed_matches, install_font_files
from .provisioner import ConsoleProgressCallback, FontProvisioner, ProvisionProgressCallback

__all__ = [
    "AssetDownloader",
    "ConsoleProgressCallback",
    "FontCatalog",
    "FontProvisioner",
    "ProvisionProgressCallback",
    "extract_archive",
    "find_installed_matches",
    "install_font_files",
    "resolve_asset_name",
]
