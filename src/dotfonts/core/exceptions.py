"""Custom exceptions for the font provisioning system."""

from typing import Any


class DotfontsError(Exception):
    """Base exception for all dotfonts errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(DotfontsError):
    """Exception raised for configuration errors."""


class WorkspaceError(DotfontsError):
    """Exception raised when the provisioner cannot set up its own directories."""


class ProvisioningError(DotfontsError):
    """Exception raised while provisioning a single font family."""


class DownloadError(ProvisioningError):
    """Exception raised when an asset cannot be downloaded."""


class ExtractError(ProvisioningError):
    """Exception raised when a downloaded archive cannot be unpacked."""


class CatalogError(DotfontsError):
    """Exception raised when the metadata catalog is unusable."""


# Specific exception classes for TRY003 compliance
class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class EmptyFontNameError(ValueError):
    """Exception raised for blank font family names."""

    def __init__(self):
        super().__init__("Font family names cannot be empty")


class InvalidReleaseUrlError(ValueError):
    """Exception raised for release or catalog URLs without a scheme."""

    def __init__(self):
        super().__init__("URL must start with https:// or http://")


class ScratchDirectoryError(WorkspaceError):
    """Exception raised when the scratch directory cannot be created."""

    def __init__(self, error: str):
        super().__init__(f"Could not create scratch directory: {error}")


class DestinationDirectoryError(WorkspaceError):
    """Exception raised when the destination directory cannot be created."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Could not create destination directory {path}: {error}")


class AssetDownloadError(DownloadError):
    """Exception raised when the HTTP transfer of an asset fails."""

    def __init__(self, url: str, error: str):
        super().__init__(error, details={"url": url})
        self.url = url


class InvalidArchiveError(ExtractError):
    """Exception raised for corrupt or non-ZIP archives."""

    def __init__(self, archive: str, error: str):
        super().__init__(f"failed to extract {archive}: {error}", details={"archive": archive})


class CatalogFormatError(CatalogError):
    """Exception raised when the catalog document has an unexpected shape."""

    def __init__(self, error: str):
        super().__init__(f"Unexpected catalog format: {error}")
