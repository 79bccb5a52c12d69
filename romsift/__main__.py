"""
Entry point for running as module: python -m romsift
"""

import sys

from .monitor import setup_runtime_monitor, monitor_action
from .shared_config import ensure_app_directories


def main():
    """Main entry point"""
    ensure_app_directories()
    logger = setup_runtime_monitor()
    monitor_action("startup: module entry", logger=logger)

    from .cli import run_cli
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
