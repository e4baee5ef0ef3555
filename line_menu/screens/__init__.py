"""Screens for line-menu."""

from .picker import PickerScreen

__all__ = ["PickerScreen"]
