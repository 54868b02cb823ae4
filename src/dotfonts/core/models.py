"""Pydantic models for provisioning results."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator


class InstallStatus(str, Enum):
    """Outcome kind for a single font request."""

    ALREADY_INSTALLED = "already_installed"
    INSTALLED = "installed"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Why a font request failed."""

    DOWNLOAD_FAILED = "download_failed"
    EXTRACT_FAILED = "extract_failed"
    UNKNOWN = "unknown"


class DefaultFontOutcome(str, Enum):
    """What happened in the default-font step."""

    SKIPPED_NOT_CONFIGURED = "skipped_not_configured"
    SKIPPED_NOT_INSTALLED = "skipped_not_installed"
    APPLIED = "applied"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class CatalogEntry(BaseModel):
    """One family described by the metadata catalog."""

    patched_name: str | None = Field(None, description="Name used in the patched font files")
    folder_name: str = Field(..., min_length=1, description="Release asset name")


class InstallResult(BaseModel):
    """Result for a single font request."""

    name: str = Field(..., min_length=1, description="Requested family name")
    status: InstallStatus = Field(..., description="Outcome kind")
    asset_name: str | None = Field(None, description="Resolved release asset name")
    installed_count: int = Field(0, ge=0, description="Number of font files copied")
    reason: FailureReason | None = Field(None, description="Failure reason if failed")
    error: str | None = Field(None, description="Captured diagnostic text")
    processing_time_ms: float = Field(0.0, ge=0.0, description="Time spent on this font")

    @model_validator(mode="after")
    def check_reason(self) -> "InstallResult":
        if self.status == InstallStatus.FAILED and self.reason is None:
            self.reason = FailureReason.UNKNOWN
        if self.status != InstallStatus.FAILED:
            self.reason = None
        return self

    @classmethod
    def already_installed(cls, name: str) -> "InstallResult":
        return cls(name=name, status=InstallStatus.ALREADY_INSTALLED)

    @classmethod
    def installed(
        cls, name: str, asset_name: str, count: int, processing_time_ms: float = 0.0
    ) -> "InstallResult":
        return cls(
            name=name,
            status=InstallStatus.INSTALLED,
            asset_name=asset_name,
            installed_count=count,
            processing_time_ms=processing_time_ms,
        )

    @classmethod
    def failed(
        cls,
        name: str,
        reason: FailureReason,
        error: str,
        asset_name: str | None = None,
        processing_time_ms: float = 0.0,
    ) -> "InstallResult":
        return cls(
            name=name,
            status=InstallStatus.FAILED,
            asset_name=asset_name,
            reason=reason,
            error=error,
            processing_time_ms=processing_time_ms,
        )

    @property
    def success(self) -> bool:
        """Whether the family is present in the destination after this run."""
        return self.status != InstallStatus.FAILED


class ProvisionReport(BaseModel):
    """Result of a full provisioning run."""

    results: list[InstallResult] = Field(default_factory=list, description="Per-font results")
    destination: Path = Field(..., description="Destination directory used")
    catalog_available: bool = Field(False, description="Whether the catalog was fetched")
    cache_refreshed: bool = Field(False, description="Whether the font cache was rebuilt")
    default_font: str | None = Field(None, description="Configured default family")
    default_font_outcome: DefaultFontOutcome = Field(
        DefaultFontOutcome.SKIPPED_NOT_CONFIGURED, description="Default-font step outcome"
    )

    @property
    def installed_items(self) -> int:
        return len([r for r in self.results if r.status == InstallStatus.INSTALLED])

    @property
    def already_installed_items(self) -> int:
        return len([r for r in self.results if r.status == InstallStatus.ALREADY_INSTALLED])

    @property
    def failed_items(self) -> int:
        return len([r for r in self.results if r.status == InstallStatus.FAILED])

    @property
    def installed_files(self) -> int:
        """Total number of font files copied in this run."""
        return sum(r.installed_count for r in self.results)

    def get_failed_items(self) -> list[InstallResult]:
        """Get list of failed items."""
        return [result for result in self.results if result.status == InstallStatus.FAILED]

    def get_result(self, name: str) -> InstallResult | None:
        for result in self.results:
            if result.name == name:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to a JSON-serializable dictionary."""
        data = self.model_dump(mode="json")
        data["summary"] = {
            "total_items": len(self.results),
            "installed_items": self.installed_items,
            "already_installed_items": self.already_installed_items,
            "failed_items": self.failed_items,
            "installed_files": self.installed_files,
        }
        return data
