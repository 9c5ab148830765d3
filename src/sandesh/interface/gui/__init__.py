from __future__ import annotations

from .toast import CTkToastNotifier

__all__ = ["CTkToastNotifier"]
