"""Configuration management for the font provisioner."""

import platform
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    EmptyFontNameError,
    InvalidReleaseUrlError,
    InvalidYamlError,
)

DEFAULT_FAMILIES = ["BlexMono", "Terminess", "Iosevka", "MonaspiceNe"]
DEFAULT_CATALOG_URL = (
    "https://raw.githubusercontent.com/ryanoasis/nerd-fonts/master/bin/scripts/lib/fonts.json"
)
DEFAULT_RELEASE_URL = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download"


def default_destination_dir(system: str | None = None) -> Path:
    """
    Get the platform-selected font destination directory.

    Args:
        system: Optional ``platform.system()`` value, detected when omitted

    Returns:
        ``~/Library/Fonts`` on macOS, ``~/.local/share/fonts`` elsewhere
    """
    system = (system or platform.system()).lower()

    if system == "darwin":
        return Path.home() / "Library" / "Fonts"

    return Path.home() / ".local" / "share" / "fonts"


class ProvisionerConfig(BaseSettings):
    """Font provisioning configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FONTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # What to install
    families: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FAMILIES),
        description="Font families to install, in processing order",
    )
    default_font: str | None = Field(
        "Terminess", description="Family to apply as desktop default (empty to skip)"
    )
    font_size: int = Field(11, ge=1, le=128, description="Point size for the desktop font")

    # Where to install
    dest_dir: Path = Field(
        default_factory=default_destination_dir, description="Font destination directory"
    )

    # Where to fetch from
    catalog_url: str = Field(DEFAULT_CATALOG_URL, description="Metadata catalog URL")
    release_url: str = Field(DEFAULT_RELEASE_URL, description="Release asset base URL")
    use_catalog: bool = Field(True, description="Fetch the metadata catalog")
    font_extensions: list[str] = Field(
        default_factory=lambda: [".ttf", ".otf"], description="Installed font file suffixes"
    )

    # HTTP settings
    timeout_seconds: float = Field(60.0, gt=0.0, description="HTTP timeout")
    chunk_size: int = Field(8192, ge=1, description="Download chunk size")
    user_agent: str = Field("dotfonts/1.0.0", description="HTTP user agent")

    # Output
    show_spinner: bool = Field(True, description="Animate a spinner while a font installs")
    show_progress: bool = Field(False, description="Show byte progress bars for downloads")
    log_level: str = Field("INFO", description="Application log level")

    @field_validator("families")
    @classmethod
    def validate_families(cls, v):
        """Strip family names and reject blank ones."""
        cleaned = [name.strip() for name in v]
        if any(not name for name in cleaned):
            raise EmptyFontNameError()
        return cleaned

    @field_validator("default_font")
    @classmethod
    def validate_default_font(cls, v):
        """Treat an empty default as "do not change the desktop font"."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("dest_dir")
    @classmethod
    def expand_dest_dir(cls, v):
        return Path(v).expanduser()

    @field_validator("catalog_url", "release_url")
    @classmethod
    def validate_url(cls, v):
        if not v.startswith(("https://", "http://")):
            raise InvalidReleaseUrlError()
        return v.rstrip("/")

    @field_validator("font_extensions")
    @classmethod
    def normalize_extensions(cls, v):
        # ".TTF", "ttf" and ".ttf" are all the same suffix
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "ProvisionerConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env"
    ) -> "ProvisionerConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            raise EmptyConfigFileError(str(config_path))

        if issubclass(config_class, BaseSettings):
            # YAML values are authoritative, so skip .env for this instance
            class TempConfig(config_class):
                model_config = SettingsConfigDict(
                    env_prefix="FONTS_",
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return TempConfig(**config_data)
        return config_class(**config_data)

    except ConfigurationError:
        raise
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
