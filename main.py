#!/usr/bin/env python3
"""
romsift
Filter archive listings of release sets down to a curated download list.

Usage:
    CLI Mode: python main.py --listing <file.json> [filters...]
    Web Mode: python main.py --web [--host HOST] [--port PORT]

For CLI help: python main.py --help
"""

import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from romsift.monitor import setup_runtime_monitor, monitor_action
from romsift.shared_config import ensure_app_directories


def main():
    """Main entry point"""
    ensure_app_directories()
    logger = setup_runtime_monitor()
    monitor_action("startup: main.py entry", logger=logger)

    if '--web' in sys.argv:
        monitor_action('mode selected: web', logger=logger)
        host = '127.0.0.1'
        port = 5000

        for i, arg in enumerate(sys.argv):
            if arg == '--host' and i + 1 < len(sys.argv):
                host = sys.argv[i + 1]
            elif arg == '--port' and i + 1 < len(sys.argv):
                port = int(sys.argv[i + 1])

        try:
            from romsift.web import run_server
        except ImportError as e:
            print("Error: Flask is required for web interface")
            print("Install it with: pip install flask")
            print(f"\nDetails: {e}")
            sys.exit(1)
        run_server(host, port)
        return

    monitor_action('mode selected: cli', logger=logger)
    from romsift.cli import run_cli
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
