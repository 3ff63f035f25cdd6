#!/usr/bin/env python
"""
Advisor audit CLI entry point.

Usage:
    python cli.py run --site au                 # Audit AU pages, JSON report
    python cli.py run --site ca --format html   # Audit CA pages, HTML report
    python cli.py run --site au --page-delay 60 # Pause between pages
    python cli.py sites                         # List configured sites
"""

from advisor_audit.cli.app import main

if __name__ == "__main__":
    main()
