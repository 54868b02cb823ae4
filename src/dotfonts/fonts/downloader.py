"""
Asset Downloader
================

Downloads release archives, unpacks them and copies the font files they
contain into the destination directory.
"""

import logging
import shutil
import time
import zipfile
from collections.abc import Iterable
from pathlib import Path

import requests
from tqdm import tqdm

from src.dotfonts.core.exceptions import AssetDownloadError, InvalidArchiveError

logger = logging.getLogger(__name__)


class DownloadProgress:
    """Progress tracker for downloads."""

    def __init__(self, total_size: int, description: str = "Downloading"):
        self.total_size = total_size
        self.downloaded = 0
        self.start_time = time.time()
        self.pbar = tqdm(
            total=total_size or None,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=description,
            leave=False,
        )

    def update(self, chunk_size: int):
        """Update progress."""
        self.downloaded += chunk_size
        self.pbar.update(chunk_size)

    def close(self):
        """Close progress bar."""
        self.pbar.close()

    @property
    def elapsed_time(self) -> float:
        """Get elapsed time in seconds."""
        return time.time() - self.start_time


def create_session(user_agent: str = "dotfonts/1.0.0") -> requests.Session:
    """Create HTTP session with appropriate configuration."""
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


class AssetDownloader:
    """
    Downloads release assets over HTTP.

    Transfers are streamed to disk in chunks. Any network or HTTP error is
    raised as AssetDownloadError carrying the client's error text.
    """

    def __init__(
        self,
        session: requests.Session,
        release_url: str,
        timeout_seconds: float = 60.0,
        chunk_size: int = 8192,
        show_progress: bool = False,
    ):
        self.session = session
        self.release_url = release_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.chunk_size = chunk_size
        self.show_progress = show_progress

    def asset_url(self, asset_name: str) -> str:
        """Build the ``.../<asset_name>.zip`` download URL."""
        return f"{self.release_url}/{asset_name}.zip"

    def download(self, url: str, target_path: Path) -> Path:
        """
        Download ``url`` to ``target_path``.

        Args:
            url: Asset URL
            target_path: File to write

        Returns:
            The written path

        Raises:
            AssetDownloadError: On connection errors, timeouts or HTTP errors
        """
        logger.debug(f"Downloading {url} to {target_path}")

        try:
            with self.session.get(url, stream=True, timeout=self.timeout_seconds) as response:
                response.raise_for_status()

                total_size = int(response.headers.get("content-length", 0) or 0)
                progress = (
                    DownloadProgress(total_size, f"Downloading {target_path.name}")
                    if self.show_progress
                    else None
                )
                downloaded_size = 0

                try:
                    with target_path.open("wb") as f:
                        for chunk in response.iter_content(chunk_size=self.chunk_size):
                            if chunk:
                                f.write(chunk)
                                downloaded_size += len(chunk)
                                if progress:
                                    progress.update(len(chunk))
                finally:
                    if progress:
                        progress.close()

        except requests.RequestException as e:
            if target_path.exists():
                target_path.unlink()
            raise AssetDownloadError(url, str(e)) from e

        logger.debug(f"Download completed: {downloaded_size} bytes")
        return target_path


def extract_archive(archive_path: Path, target_dir: Path) -> Path:
    """
    Unpack a ZIP archive.

    Args:
        archive_path: Archive to unpack
        target_dir: Directory to unpack into (created if missing)

    Returns:
        ``target_dir``

    Raises:
        InvalidArchiveError: If the archive is corrupt, not a ZIP file, encrypted
            or uses an unsupported compression method
    """
    # zipfile raises NotImplementedError for unknown compression methods and
    # RuntimeError for encrypted members
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(target_dir)
    except (
        zipfile.BadZipFile,
        zipfile.LargeZipFile,
        EOFError,
        OSError,
        ValueError,
        NotImplementedError,
        RuntimeError,
    ) as e:
        raise InvalidArchiveError(archive_path.name, str(e)) from e

    return target_dir


def _has_font_extension(path: Path, extensions: Iterable[str]) -> bool:
    return path.suffix.lower() in {ext.lower() for ext in extensions}


def find_font_files(root: Path, extensions: Iterable[str]) -> list[Path]:
    """Recursively find font files under ``root``, sorted for stable output."""
    extensions = list(extensions)
    return sorted(
        path for path in root.rglob("*") if path.is_file() and _has_font_extension(path, extensions)
    )


def install_font_files(source_dir: Path, dest_dir: Path, extensions: Iterable[str]) -> int:
    """
    Copy every font file under ``source_dir`` into ``dest_dir``.

    Existing files with the same name are overwritten.

    Returns:
        Number of files copied
    """
    count = 0
    for font_file in find_font_files(source_dir, extensions):
        shutil.copy2(font_file, dest_dir / font_file.name)
        count += 1

    return count


def find_installed_matches(
    dest_dir: Path, name: str, extensions: Iterable[str] | None = None
) -> list[Path]:
    """
    Find installed files whose name contains ``name``, ignoring case.

    Args:
        dest_dir: Destination directory to scan recursively
        name: Family name to look for
        extensions: Optional font suffixes to restrict the scan to

    Returns:
        Matching file paths, sorted
    """
    if not dest_dir.is_dir():
        return []

    needle = name.lower()
    extensions = list(extensions) if extensions is not None else None

    matches = []
    for path in dest_dir.rglob("*"):
        if not path.is_file() or needle not in path.name.lower():
            continue
        if extensions is not None and not _has_font_extension(path, extensions):
            continue
        matches.append(path)

    return sorted(matches)
