"""dotfonts
========

Personal environment font provisioning: installs Nerd Fonts release assets
into the user's font directory, refreshes the font cache and applies a
desktop default font.
"""

__version__ = "1.0.0"

from .core.config import ProvisionerConfig
from .core.exceptions import DotfontsError, WorkspaceError
from .core.models import InstallResult, InstallStatus, ProvisionReport
from .fonts import FontCatalog, FontProvisioner

__all__ = [
    "DotfontsError",
    "FontCatalog",
    "FontProvisioner",
    "InstallResult",
    "InstallStatus",
    "ProvisionReport",
    "ProvisionerConfig",
    "WorkspaceError",
]
