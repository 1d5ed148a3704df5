#!/usr/bin/env python3

"""bswitcher - pick a bspwm window from dmenu and focus it"""

import logging
import os
import sys

from .config import parse_arguments, args_to_config, required_programs
from .errors import SwitcherError
from .shell import check_dependencies
from .switcher import build_switcher

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def print_source():
    """Print every module of the package (for --src)"""
    package_dir = os.path.dirname(os.path.abspath(__file__))
    for name in sorted(os.listdir(package_dir)):
        if not name.endswith('.py'):
            continue
        with open(os.path.join(package_dir, name), encoding='utf-8') as f:
            print(f"### {name}\n{f.read()}")


def main(argv=None) -> int:
    """Main entry point"""
    # Parse arguments
    args = parse_arguments(argv)

    # Configure logging
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    elif args.verbose:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    else:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)

    if args.src:
        print_source()
        return 0

    config = args_to_config(args)

    try:
        check_dependencies(required_programs(config, listing=args.list))
        switcher = build_switcher(config)

        # Handle --list
        if args.list:
            for line in switcher.list_windows():
                print(line)
            return 0

        switcher.run()
    except SwitcherError as e:
        logger.error(f"{e.stage}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
