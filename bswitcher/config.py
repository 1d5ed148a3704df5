"""Configuration and command-line argument parsing"""

import argparse
from typing import Dict, List, Optional

from .constants import BSWITCHER_VERSION, DEFAULT_CONFIG, REQUIRED_PROGRAMS, XTITLE_PROGRAM
from .ordering import SortOrder


def build_parser() -> argparse.ArgumentParser:
    """Build the bswitcher argument parser"""
    parser = argparse.ArgumentParser(
        prog="bswitcher",
        description="Interactively select a bspwm node (using dmenu) and focus that node (using bspc).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Defaults
  %(prog)s -f='$((line_number + 1)) - $xtitle' -d='-p "$(date)" -l 30 -b -i' -s creation
                                            # Numbered from 1, oldest window first
  %(prog)s --format-string '$xtitle' --pipe 'sed -E "s_(.*) - Mozilla (Firefox)_\\2 | \\1_"'
                                            # Show "Firefox" before the tab title
  %(prog)s --reverse --list                 # Print the menu instead of showing it
        """)

    # Menu contents
    parser.add_argument(
        '-f', '--format-string', default=DEFAULT_CONFIG['format_string'], metavar='FORMAT_STRING',
        help='Format string for each line, expanded with normal shell expansions. '
             'It has access to $line_number (position in SORT_ORDER), $xtitle (the raw '
             'window title) and $number_of_nodes (number of windows listed) '
             '(default: %(default)s)')
    parser.add_argument(
        '-s', '--sort-order', default=DEFAULT_CONFIG['sort_order'], choices=SortOrder.names(),
        metavar='SORT_ORDER',
        help='"focus-history" lists the most recently focused window first and ends with '
             'the current window; "focus-history-current-first" puts the current window '
             'first; "creation" lists windows by id, oldest first; "alphabetical" sorts by '
             'raw title, ignoring case (default: %(default)s)')
    parser.add_argument(
        '-r', '--reverse', action='store_true',
        help='Reverse the display order. $line_number is not affected; compute '
             '$(($number_of_nodes - line_number)) for reversed numbering')
    parser.add_argument(
        '-p', '--pipe', metavar='COMMAND',
        help='Shell command that each formatted line is piped through')

    # Menu program
    parser.add_argument(
        '-d', '--dmenu-args', default=DEFAULT_CONFIG['dmenu_args'], metavar='DMENU_ARGS',
        help="Arguments passed to dmenu; use -d='...' for values starting with '-' "
             "(default: %(default)s)")

    # Backends
    parser.add_argument(
        '--wnck', action='store_true',
        help='Read titles and focus windows through libwnck instead of xtitle and bspc')

    # Utilities
    parser.add_argument(
        '--list', action='store_true',
        help='Print window ids and menu lines and exit')
    parser.add_argument(
        '--src', action='store_true',
        help="Print this program's source to stdout and exit")
    parser.add_argument(
        '--version', action='version', version=f'%(prog)s {BSWITCHER_VERSION}')

    # Logging
    parser.add_argument(
        '--debug', action='store_true',
        help='Enable debug logging')
    parser.add_argument(
        '--verbose', action='store_true',
        help='Enable verbose logging')

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.format_string:
        parser.error("--format-string must not be empty")
    if args.pipe is not None and not args.pipe.strip():
        args.pipe = None

    return args


def args_to_config(args: argparse.Namespace) -> Dict:
    """Convert parsed arguments to configuration dictionary

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration dictionary
    """
    return {
        'format_string': args.format_string,
        'sort_order': args.sort_order,
        'reverse': args.reverse,
        'dmenu_args': args.dmenu_args,
        'pipe': args.pipe,
        'wnck': args.wnck,
    }


def required_programs(config: Dict, listing: bool = False) -> List[str]:
    """External programs a run with this configuration needs"""
    programs = [name for name in REQUIRED_PROGRAMS if not (listing and name == "dmenu")]
    if not config.get('wnck'):
        programs.append(XTITLE_PROGRAM)
    return programs
