#!/usr/bin/env python3
"""
Unit tests for bspwm history, xtitle titles and the Wnck backend
"""

import json
import os
import shutil
import sys
import unittest
from unittest.mock import Mock, patch

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bswitcher import windows
from bswitcher.errors import CommandError, DispatchFailure


def make_dump(node_ids):
    return json.dumps({
        'focusedMonitorId': 1,
        'focusHistory': [
            {'monitorId': 1, 'desktopId': 2, 'nodeId': node_id} for node_id in node_ids
        ],
    })


class TestFocusHistory(unittest.TestCase):
    """Test reading bspwm focus history"""

    def test_node_ids_in_order(self):
        """Test ids are returned most recent last, repeats included"""
        self.assertEqual(windows.parse_focus_history(make_dump([5, 6, 5])), [5, 6, 5])

    def test_empty_desktop_events_skipped(self):
        """Test zero node ids are ignored"""
        self.assertEqual(windows.parse_focus_history(make_dump([5, 0, 6])), [5, 6])

    def test_invalid_json(self):
        """Test unreadable dump"""
        with self.assertRaises(CommandError):
            windows.parse_focus_history("not json")

    def test_missing_history(self):
        """Test dump without focusHistory"""
        with self.assertRaises(CommandError):
            windows.parse_focus_history('{"monitors": []}')

    def test_runs_bspc(self):
        """Test the history source command"""
        with patch('bswitcher.windows.sh', return_value=(make_dump([1, 2]), "")) as mock_sh:
            self.assertEqual(windows.bspwm_focus_history(), [1, 2])
        mock_sh.assert_called_once_with("bspc wm --dump-state")


class TestXtitle(unittest.TestCase):
    """Test the xtitle title resolver"""

    def test_split_keeps_blank_titles(self):
        """Test blank lines stay aligned with ids"""
        self.assertEqual(windows.split_title_lines("a\n\nc\n"), ["a", "", "c"])

    def test_split_single_blank(self):
        """Test one blank title"""
        self.assertEqual(windows.split_title_lines("\n"), [""])

    def test_split_nothing(self):
        """Test no output"""
        self.assertEqual(windows.split_title_lines(""), [])

    def test_ids_joined(self):
        """Test ids are passed space-separated"""
        with patch('bswitcher.windows.sh', return_value=("one\ntwo\n", "")) as mock_sh:
            self.assertEqual(windows.xtitle_titles([1, 2]), ["one", "two"])
        mock_sh.assert_called_once_with("xtitle 1 2")

    @unittest.skipUnless(shutil.which('bash'), "bash is required")
    def test_latin1_title(self):
        """Test a title that is not valid UTF-8 still resolves"""
        with patch('bswitcher.windows.XTITLE_PROGRAM', "printf 'caf\\xe9\\n' #"):
            self.assertEqual(windows.xtitle_titles([1]), ["caf\ufffd"])

    def test_no_ids_no_call(self):
        """Test xtitle is not run without ids"""
        with patch('bswitcher.windows.sh') as mock_sh:
            self.assertEqual(windows.xtitle_titles([]), [])
        mock_sh.assert_not_called()


class TestBspcFocus(unittest.TestCase):
    """Test focusing through bspc"""

    def test_focus_command(self):
        """Test the focus command"""
        with patch('bswitcher.windows.sh', return_value=("", "")) as mock_sh:
            windows.bspc_focus(4194307)
        mock_sh.assert_called_once_with("bspc node 4194307 --focus")

    def test_focus_failure(self):
        """Test a failing bspc is a dispatch failure"""
        error = CommandError("bspc node 1 --focus", 1, "Invalid descriptor")
        with patch('bswitcher.windows.sh', side_effect=error):
            with self.assertRaises(DispatchFailure) as ctx:
                windows.bspc_focus(1)
        self.assertEqual(ctx.exception.window_id, 1)
        self.assertIn("Invalid descriptor", str(ctx.exception))


class TestWnckWindows(unittest.TestCase):
    """Test the libwnck backend with a mocked screen"""

    def setUp(self):
        """Set up mocked Gtk and Wnck"""
        self.firefox = self.make_window(101, "Firefox")
        self.terminal = self.make_window(102, "Terminal\nsecond line")
        self.screen = Mock()
        self.screen.get_windows.return_value = [self.firefox, self.terminal]

        self.gtk = Mock()
        self.gtk.events_pending.return_value = False
        self.gtk.get_current_event_time.return_value = 0
        self.wnck = Mock()
        self.wnck.Screen.get_default.return_value = self.screen

        patches = [
            patch.object(windows, 'WNCK_AVAILABLE', True),
            patch.object(windows, 'Gtk', self.gtk),
            patch.object(windows, 'Wnck', self.wnck),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def make_window(self, xid, name):
        window = Mock()
        window.get_xid.return_value = xid
        window.get_name.return_value = name
        return window

    def test_titles(self):
        """Test titles by XID, blank for unknown windows"""
        titles = windows.WnckWindows().get_titles([101, 999, "102"])
        self.assertEqual(titles, ["Firefox", "", "Terminal second line"])

    def test_lookup_by_xid(self):
        """Test window lookup"""
        wnck = windows.WnckWindows()
        self.assertIs(wnck.get_window_by_xid(101), self.firefox)
        self.assertIsNone(wnck.get_window_by_xid("nope"))

    def test_invalid_window_skipped(self):
        """Test windows whose name cannot be read are ignored"""
        self.firefox.get_name.side_effect = Exception("stale window")
        self.assertIsNone(windows.WnckWindows().get_window_by_xid(101))

    def test_activate(self):
        """Test activation uses the current event time"""
        windows.WnckWindows().activate(102)
        self.terminal.activate.assert_called_once_with(0)

    def test_activate_missing_window(self):
        """Test activating a closed window"""
        with self.assertRaises(DispatchFailure):
            windows.WnckWindows().activate(999)

    def test_activate_error(self):
        """Test activation errors are dispatch failures"""
        self.firefox.activate.side_effect = Exception("BadWindow")
        with self.assertRaises(DispatchFailure):
            windows.WnckWindows().activate(101)

    def test_unavailable(self):
        """Test missing libwnck"""
        with patch.object(windows, 'WNCK_AVAILABLE', False):
            with self.assertRaises(CommandError):
                windows.WnckWindows()


if __name__ == '__main__':
    unittest.main()
