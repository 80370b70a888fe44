"""
Package entry point for python -m execution.

USAGE:
    python -m focus_analytics report     # Print analytics report
    python -m focus_analytics add ...    # Record a session
    python -m focus_analytics dashboard  # Serve the JSON API
"""

import sys

from focus_analytics.cli import main

if __name__ == "__main__":
    sys.exit(main())
