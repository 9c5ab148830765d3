from __future__ import annotations

"""
Desktop Toast Notifications.

Implements the Notifier contract with a borderless, always-on-top
customtkinter window that dismisses itself after the requested duration.
Must be driven from the thread running the host's Tk main loop.
"""

from typing import Any, Tuple

import customtkinter as ctk

from sandesh.domain.models import ToastDuration
from sandesh.domain.ports import Notifier

# -----------------------------------------------------------------------------
# LAYOUT CONSTANTS
# -----------------------------------------------------------------------------
TOAST_HEIGHT = 44
TOAST_MIN_WIDTH = 160
TOAST_MAX_WIDTH = 480
TOAST_CHAR_WIDTH = 8
TOAST_BOTTOM_MARGIN = 48
TOAST_BG = "#323232"
TOAST_FG = "#FFFFFF"


class CTkToastNotifier(Notifier):
    """
    Shows short-lived messages centered near the bottom of a parent window.
    """

    def __init__(self, master: Any):
        """
        Args:
            master: Parent customtkinter window the toast is anchored to.
        """
        self.master = master

    def show(self, message: str, duration: ToastDuration) -> None:
        """
        Open the toast and schedule its destruction. Returns immediately.

        Args:
            message: Text to display.
            duration: SHORT or LONG display preset.
        """
        toplevel = ctk.CTkToplevel(self.master)
        toplevel.overrideredirect(True)
        toplevel.attributes("-topmost", True)

        ctk.CTkLabel(
            toplevel,
            text=message,
            fg_color=TOAST_BG,
            text_color=TOAST_FG,
            corner_radius=8,
        ).pack(fill="both", expand=True)

        width, height = self._measure(message)
        x, y = self._position(width, height)
        toplevel.geometry(f"{width}x{height}+{x}+{y}")

        toplevel.after(duration.millis, toplevel.destroy)

    def _measure(self, message: str) -> Tuple[int, int]:
        """Approximate a width that fits the message on one line."""
        width = len(message) * TOAST_CHAR_WIDTH + 40
        return max(TOAST_MIN_WIDTH, min(TOAST_MAX_WIDTH, width)), TOAST_HEIGHT

    def _position(self, width: int, height: int) -> Tuple[int, int]:
        self.master.update_idletasks()
        x = self.master.winfo_rootx() + (self.master.winfo_width() - width) // 2
        y = self.master.winfo_rooty() + self.master.winfo_height() - height - TOAST_BOTTOM_MARGIN
        return max(0, x), max(0, y)
