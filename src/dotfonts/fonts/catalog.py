"""
Font Catalog
============

Optional metadata catalog mapping patched family names to release asset names.
The Nerd Fonts project publishes it as ``fonts.json``; a family such as
"BlexMono" ships in the "IBMPlexMono" archive.
"""

import logging
from typing import Any

import requests
from pydantic import ValidationError

from src.dotfonts.core.exceptions import CatalogFormatError
from src.dotfonts.core.models import CatalogEntry

logger = logging.getLogger(__name__)


class FontCatalog:
    """In-memory view of the metadata catalog."""

    def __init__(self, entries: list[CatalogEntry]):
        self.entries = entries

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def from_json(cls, data: Any) -> "FontCatalog":
        """
        Build a catalog from the decoded JSON document.

        Args:
            data: Either ``{"fonts": [...]}`` or a bare list of entries

        Returns:
            FontCatalog with every well-formed entry

        Raises:
            CatalogFormatError: If the document is not a list of entries
        """
        raw_entries = data.get("fonts") if isinstance(data, dict) else data
        if not isinstance(raw_entries, list):
            raise CatalogFormatError("expected a 'fonts' array")

        entries = []
        for raw in raw_entries:
            if not isinstance(raw, dict):
                continue
            try:
                entries.append(
                    CatalogEntry(
                        patched_name=raw.get("patchedName"),
                        folder_name=raw.get("folderName") or "",
                    )
                )
            except ValidationError:
                logger.debug(f"Ignoring catalog entry without folderName: {raw}")

        return cls(entries)

    @classmethod
    def fetch(
        cls, session: requests.Session, url: str, timeout: float = 60.0
    ) -> "FontCatalog | None":
        """
        Fetch the catalog, returning None on any failure.

        Args:
            session: HTTP session
            url: Catalog URL
            timeout: Request timeout in seconds

        Returns:
            FontCatalog, or None when the catalog is unavailable
        """
        try:
            response = session.get(url, timeout=timeout)
            response.raise_for_status()
            catalog = cls.from_json(response.json())
        except (requests.RequestException, ValueError, CatalogFormatError) as e:
            logger.warning(f"Font catalog unavailable, using names verbatim: {e}")
            return None

        logger.info(f"Loaded font catalog with {len(catalog)} families")
        return catalog

    def resolve(self, name: str) -> str | None:
        """Return the folder name of the first entry matching ``name`` exactly."""
        for entry in self.entries:
            if entry.patched_name == name or entry.folder_name == name:
                return entry.folder_name
        return None


def resolve_asset_name(name: str, catalog: FontCatalog | None) -> str:
    """
    Resolve a requested family to its release asset name.

    Args:
        name: Requested family name
        catalog: Optional metadata catalog

    Returns:
        The catalog folder name if one matches, otherwise ``name`` verbatim
    """
    if catalog is not None:
        folder_name = catalog.resolve(name)
        if folder_name:
            if folder_name != name:
                logger.debug(f"Resolved {name} to release asset {folder_name}")
            return folder_name

    return name
