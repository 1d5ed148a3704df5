"""Window sources and focus sinks: bspwm, xtitle and libwnck"""

import json
import logging
from typing import Dict, List, Optional

from .constants import XTITLE_PROGRAM
from .errors import CommandError, DispatchFailure
from .shell import sh

logger = logging.getLogger(__name__)

# Wnck is only needed for the --wnck backend
try:
    import gi
    gi.require_version("Gtk", "3.0")
    gi.require_version("Wnck", "3.0")
    from gi.repository import Gtk, Wnck
    WNCK_AVAILABLE = True
except (ValueError, ImportError):
    WNCK_AVAILABLE = False
    Gtk = None
    Wnck = None


def parse_focus_history(dump: str) -> List[int]:
    """Extract window ids from a `bspc wm --dump-state` document

    Args:
        dump: JSON text printed by bspc

    Returns:
        Node ids in focus order, most recent last, repeats included

    Raises:
        CommandError: If the dump is not JSON or has no focus history
    """
    try:
        state = json.loads(dump)
        history = state["focusHistory"]
    except (ValueError, KeyError, TypeError) as e:
        raise CommandError("bspc wm --dump-state", stderr=f"unreadable state dump ({e})") from e

    node_ids = []
    for item in history:
        node_id = item.get("nodeId") if isinstance(item, dict) else None
        # A zero node is a focused desktop without a window
        if not node_id:
            continue
        node_ids.append(node_id)
    return node_ids


def bspwm_focus_history() -> List[int]:
    """History Source backed by bspwm"""
    dump, _ = sh("bspc wm --dump-state")
    node_ids = parse_focus_history(dump)
    logger.debug(f"bspwm focus history has {len(node_ids)} event(s)")
    return node_ids


def split_title_lines(output: str) -> List[str]:
    """Split resolver output into one title per line, keeping blank titles"""
    if not output:
        return []
    if output.endswith("\n"):
        output = output[:-1]
    return output.split("\n")


def xtitle_titles(window_ids: List) -> List[str]:
    """Title Resolver backed by xtitle(1)"""
    if not window_ids:
        return []
    out, _ = sh(f"{XTITLE_PROGRAM} {' '.join(str(window_id) for window_id in window_ids)}")
    return split_title_lines(out)


def bspc_focus(window_id):
    """Focus sink backed by bspc"""
    try:
        sh(f"bspc node {window_id} --focus")
    except CommandError as e:
        raise DispatchFailure(window_id, str(e)) from e
    logger.info(f"Focused window {window_id}")


class WnckWindows:
    """Title lookup and window activation through libwnck"""

    def __init__(self):
        """Initialize the Wnck screen

        Raises:
            CommandError: If libwnck or a display is unavailable
        """
        if not WNCK_AVAILABLE:
            raise CommandError("libwnck", stderr="Wnck 3.0 introspection data is not installed")

        Gtk.init_check([])
        Wnck.set_client_type(Wnck.ClientType.PAGER)
        self.screen_wnck = Wnck.Screen.get_default()
        if not self.screen_wnck:
            raise CommandError("libwnck", stderr="could not get the default screen")

        self.screen_wnck.force_update()
        logger.info("Wnck screen initialized")

    def window_is_valid(self, window) -> bool:
        """Check if window object is still valid

        Args:
            window: Wnck window object

        Returns:
            True if valid
        """
        if not window:
            return False

        try:
            return window.get_name() is not None
        except Exception:
            return False

    def _windows_by_xid(self) -> Dict[int, object]:
        windows = {}
        for window in self.screen_wnck.get_windows() or []:
            if self.window_is_valid(window):
                windows[window.get_xid()] = window
        return windows

    def get_window_by_xid(self, xid) -> Optional[object]:
        """Look up window by XID

        Args:
            xid: X11 window ID (int or numeric string)

        Returns:
            Window object or None
        """
        try:
            return self._windows_by_xid().get(int(xid))
        except (TypeError, ValueError):
            logger.debug(f"Not an X window id: {xid!r}")
            return None

    def get_titles(self, window_ids: List) -> List[str]:
        """Title Resolver: one title per id, blank for unknown windows"""
        windows = self._windows_by_xid()
        titles = []
        for window_id in window_ids:
            try:
                window = windows.get(int(window_id))
            except (TypeError, ValueError):
                window = None
            name = window.get_name() if window else ""
            titles.append(" ".join((name or "").splitlines()))
        return titles

    def activate(self, window_id):
        """Focus sink: activate the window with the given XID

        Raises:
            DispatchFailure: If the window is gone or activation fails
        """
        window = self.get_window_by_xid(window_id)
        if not window:
            raise DispatchFailure(window_id, "window no longer exists")

        try:
            window.activate(Gtk.get_current_event_time())
            # Flush the request before the process exits
            while Gtk.events_pending():
                Gtk.main_iteration()
        except Exception as e:
            raise DispatchFailure(window_id, str(e)) from e
        logger.info(f"Activated window {window_id}")
