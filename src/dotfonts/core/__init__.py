"""Core components for font provisioning."""

from .config import ProvisionerConfig, default_destination_dir
from .exceptions import (
    CatalogError,
    ConfigurationError,
    DotfontsError,
    DownloadError,
    ExtractError,
    WorkspaceError,
)
from .models import (
    CatalogEntry,
    DefaultFontOutcome,
    FailureReason,
    InstallResult,
    InstallStatus,
    ProvisionReport,
)

__all__ = [
    "CatalogEntry",
    "CatalogError",
    "ConfigurationError",
    "DefaultFontOutcome",
    "DotfontsError",
    "DownloadError",
    "ExtractError",
    "FailureReason",
    "InstallResult",
    "InstallStatus",
    "ProvisionReport",
    "ProvisionerConfig",
    "WorkspaceError",
    "default_destination_dir",
]
