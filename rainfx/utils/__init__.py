"""Utility modules for rainfx."""

from rainfx.utils.error_recovery import CrashReport, TickGuard

__all__ = ["CrashReport", "TickGuard"]
