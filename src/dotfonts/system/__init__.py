"""Wrappers around optional desktop tools."""

from .capabilities import CapabilityResult, DesktopFontSetter, FontCacheRefresher, SystemCapability

__all__ = [
    "CapabilityResult",
    "DesktopFontSetter",
    "FontCacheRefresher",
    "SystemCapability",
]
