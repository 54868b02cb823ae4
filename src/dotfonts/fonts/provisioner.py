"""
Font Provisioner
================

Downloads, unpacks and installs a list of font families, then refreshes the
font cache and optionally applies one family as the desktop default.

A family that fails to download or extract is recorded and skipped; only a
failure to create the provisioner's own directories aborts the run.
"""

import logging
import shutil
import sys
import tempfile
import time
from pathlib import Path

import requests

from src.dotfonts.core.config import ProvisionerConfig
from src.dotfonts.core.exceptions import (
    DestinationDirectoryError,
    DownloadError,
    ExtractError,
    ScratchDirectoryError,
)
from src.dotfonts.core.models import (
    DefaultFontOutcome,
    FailureReason,
    InstallResult,
    InstallStatus,
    ProvisionReport,
)
from src.dotfonts.system.capabilities import DesktopFontSetter, FontCacheRefresher
from src.dotfonts.ui.spinner import Spinner

from .catalog import FontCatalog, resolve_asset_name
from .downloader import (
    AssetDownloader,
    create_session,
    extract_archive,
    find_installed_matches,
    install_font_files,
)

logger = logging.getLogger(__name__)

ICON_LOADING = "⏳"
ICON_OK = "✔"
ICON_FAIL = "✖"


class ProvisionProgressCallback:
    """Base class for provisioning progress callbacks."""

    def on_start(self, total_items: int, destination: Path) -> None:
        """Called once the workspace is ready."""

    def on_item_start(self, name: str, item_index: int) -> None:
        """Called before a family's download starts."""

    def on_item_complete(self, result: InstallResult) -> None:
        """Called with each family's result, after the spinner has stopped."""

    def on_complete(self, report: ProvisionReport) -> None:
        """Called when provisioning completes."""


class ConsoleProgressCallback(ProvisionProgressCallback):
    """Prints one compact line per family."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    def _print(self, message: str) -> None:
        print(message, file=self.stream, flush=True)

    def on_start(self, total_items: int, destination: Path) -> None:
        self._print(f"Installing {total_items} font families into {destination}")

    def on_item_start(self, name: str, item_index: int) -> None:
        self._print(f"  [{ICON_LOADING}] {name}")

    def on_item_complete(self, result: InstallResult) -> None:
        if result.status == InstallStatus.ALREADY_INSTALLED:
            self._print(f"  [{ICON_OK}] {result.name} - already installed")
        elif result.status == InstallStatus.INSTALLED:
            self._print(
                f"  [{ICON_OK}] {result.name} - installed {result.installed_count} font(s)"
            )
        else:
            self._print(f"  [{ICON_FAIL}] {result.name} - {result.error}")

    def on_complete(self, report: ProvisionReport) -> None:
        self._print(
            f"Done. {report.installed_items} installed, "
            f"{report.already_installed_items} already present, "
            f"{report.failed_items} failed. Installed fonts are in: {report.destination}"
        )


class FontProvisioner:
    """
    Font provisioning pipeline.

    Features:
    - Idempotent: families already present in the destination are skipped
    - Catalog-driven asset name resolution with verbatim fallback
    - Per-family failure isolation
    - Best-effort font cache refresh and desktop default font
    """

    def __init__(
        self,
        config: ProvisionerConfig | None = None,
        session: requests.Session | None = None,
        cache_refresher: FontCacheRefresher | None = None,
        desktop_setter: DesktopFontSetter | None = None,
        progress_callback: ProvisionProgressCallback | None = None,
    ):
        """
        Initialize the provisioner.

        Args:
            config: Provisioning configuration, loaded from the environment if omitted
            session: Optional HTTP session; one is created (and closed) otherwise
            cache_refresher: Font cache capability
            desktop_setter: Desktop font capability
            progress_callback: Receives per-family progress
        """
        self.config = config or ProvisionerConfig()
        self._owns_session = session is None
        self.session = session or create_session(self.config.user_agent)
        self.cache_refresher = cache_refresher or FontCacheRefresher()
        self.desktop_setter = desktop_setter or DesktopFontSetter()
        self.progress_callback = progress_callback or ProvisionProgressCallback()
        self.downloader = AssetDownloader(
            self.session,
            self.config.release_url,
            timeout_seconds=self.config.timeout_seconds,
            chunk_size=self.config.chunk_size,
            show_progress=self.config.show_progress,
        )

    @property
    def dest_dir(self) -> Path:
        return self.config.dest_dir

    def provision(self) -> ProvisionReport:
        """
        Run the full provisioning sequence.

        Returns:
            ProvisionReport with one InstallResult per requested family

        Raises:
            WorkspaceError: If the scratch or destination directory cannot be created
        """
        work_dir = self._create_scratch_dir()
        try:
            self._ensure_destination()
            logger.info(f"Using temporary dir: {work_dir}")

            catalog = self.load_catalog()
            report = ProvisionReport(
                destination=self.dest_dir,
                catalog_available=catalog is not None,
                default_font=self.config.default_font,
            )

            self.progress_callback.on_start(len(self.config.families), self.dest_dir)

            for index, name in enumerate(self.config.families):
                self.progress_callback.on_item_start(name, index)
                with Spinner(
                    f"Installing {name}",
                    enabled=self.config.show_spinner and not self.config.show_progress,
                ):
                    result = self.install_font(name, catalog, work_dir)
                report.results.append(result)
                self.progress_callback.on_item_complete(result)

            report.cache_refreshed = self.refresh_cache()
            report.default_font_outcome = self.apply_default_font()

            self.progress_callback.on_complete(report)
            return report
        finally:
            shutil.rmtree(work_dir, ignore_errors=True)
            logger.debug(f"Removed temporary dir: {work_dir}")

    def _create_scratch_dir(self) -> Path:
        try:
            return Path(tempfile.mkdtemp(prefix="dotfonts-"))
        except OSError as e:
            raise ScratchDirectoryError(str(e)) from e

    def _ensure_destination(self) -> None:
        try:
            self.dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationDirectoryError(str(self.dest_dir), str(e)) from e

    def load_catalog(self) -> FontCatalog | None:
        """Fetch the metadata catalog if enabled; None when disabled or unavailable."""
        if not self.config.use_catalog:
            logger.debug("Font catalog disabled, using names verbatim")
            return None
        return FontCatalog.fetch(self.session, self.config.catalog_url, self.config.timeout_seconds)

    def resolve_url(self, name: str, catalog: FontCatalog | None) -> str:
        return self.downloader.asset_url(resolve_asset_name(name, catalog))

    def install_font(
        self, name: str, catalog: FontCatalog | None, work_dir: Path
    ) -> InstallResult:
        """
        Download, extract and install one family.

        Args:
            name: Requested family name
            catalog: Optional metadata catalog
            work_dir: Scratch directory for this run

        Returns:
            InstallResult; errors are captured, never raised
        """
        start_time = time.time()

        def elapsed_ms() -> float:
            return (time.time() - start_time) * 1000

        existing = find_installed_matches(self.dest_dir, name)
        if existing:
            logger.info(f"{name} already installed ({existing[0].name}), skipping download")
            return InstallResult.already_installed(name)

        asset_name = resolve_asset_name(name, catalog)
        url = self.downloader.asset_url(asset_name)
        archive_path = work_dir / f"{name}.zip"
        extract_dir = work_dir / name

        try:
            self.downloader.download(url, archive_path)
        except DownloadError as e:
            error_text = str(e) or "download failed"
            (work_dir / f"{name}.err").write_text(error_text)
            logger.warning(f"Download failed for {name} from {url}: {error_text}")
            return InstallResult.failed(
                name, FailureReason.DOWNLOAD_FAILED, error_text, asset_name, elapsed_ms()
            )
        except Exception as e:
            logger.exception(f"Unexpected error downloading {name}")
            return InstallResult.failed(
                name, FailureReason.UNKNOWN, str(e), asset_name, elapsed_ms()
            )

        try:
            extract_archive(archive_path, extract_dir)
        except ExtractError as e:
            logger.warning(f"Extraction failed for {name}: {e}")
            return InstallResult.failed(
                name, FailureReason.EXTRACT_FAILED, str(e), asset_name, elapsed_ms()
            )
        except Exception as e:
            logger.exception(f"Unexpected error extracting {name}")
            return InstallResult.failed(
                name, FailureReason.UNKNOWN, str(e), asset_name, elapsed_ms()
            )

        try:
            count = install_font_files(extract_dir, self.dest_dir, self.config.font_extensions)
        except Exception as e:
            logger.exception(f"Failed to install font files for {name}")
            return InstallResult.failed(
                name, FailureReason.UNKNOWN, str(e), asset_name, elapsed_ms()
            )

        if count == 0:
            logger.warning(f"{asset_name}.zip contained no font files")
        logger.info(f"Installed {count} font file(s) for {name}")
        return InstallResult.installed(name, asset_name, count, elapsed_ms())

    def refresh_cache(self) -> bool:
        """Rebuild the system font cache if the tool is available."""
        logger.info("Refreshing font cache...")
        if not self.cache_refresher.available():
            logger.warning("Font cache tool not available, skipping cache refresh")
            return False
        return self.cache_refresher.apply(self.dest_dir).success

    def apply_default_font(self) -> DefaultFontOutcome:
        """
        Apply the configured default family to the desktop.

        Returns:
            DefaultFontOutcome describing what happened; never raises
        """
        default = self.config.default_font
        if not default:
            logger.info("No default font requested, skipping system font change")
            return DefaultFontOutcome.SKIPPED_NOT_CONFIGURED

        matches = find_installed_matches(self.dest_dir, default, self.config.font_extensions)
        if not matches:
            logger.info(
                f"Requested default font '{default}' was not found in {self.dest_dir}, "
                "not changing system font"
            )
            return DefaultFontOutcome.SKIPPED_NOT_INSTALLED

        logger.info(f"Found {len(matches)} installed file(s) matching default font '{default}'")
        for match in matches:
            logger.debug(f"  {match.name}")

        if not self.desktop_setter.available():
            logger.warning(
                "Desktop configuration tool not found, set the font in your desktop settings"
            )
            return DefaultFontOutcome.UNAVAILABLE

        result = self.desktop_setter.apply(default, self.config.font_size)
        if not result.success:
            logger.warning(f"Could not set desktop font to '{default}': {result.message}")
            return DefaultFontOutcome.FAILED

        return DefaultFontOutcome.APPLIED

    def close(self) -> None:
        """Close the HTTP session if this provisioner created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "FontProvisioner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
