"""
Input Timeline - Main Module
----------------------------
Initializes and runs the input timeline viewer.
"""

import argparse
from typing import List, Optional

from input_timeline.app import Application
from input_timeline.config_manager import ConfigError, DEFAULT_MAPPING_SETS


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Input Timeline")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON configuration file (default: built-in settings)"
    )
    parser.add_argument(
        "--controller",
        choices=sorted(DEFAULT_MAPPING_SETS),
        default=None,
        help="Track the default buttons of this controller type instead of the configured ones"
    )
    args = parser.parse_args(argv)

    try:
        app = Application(config_path=args.config)
    except ConfigError:
        return 1

    if args.controller:
        app.switch_controller(args.controller)

    try:
        app.run()
    except Exception as e:
        print(f"[App] Unhandled exception: {e}")
        return 1
    finally:
        print("[App] Exiting")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
