#!/usr/bin/env python
"""Desktop app entrypoint with verbose console logging enabled."""

import logging
import os
import sys

# Force dev mode with verbose logging
os.environ["PTALEDGER_DEV_MODE"] = "true"

# Set up console logging before importing anything else
logging.basicConfig(
    level=logging.DEBUG,
    format="[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)

print("=" * 80)
print("PTA Ledger - VERBOSE DEV MODE")
print("Requests, route changes and errors will be logged below (passcodes are never logged)")
print("=" * 80)
print()

import flet as ft  # noqa: E402

from ptaledger.desktop.app import main  # noqa: E402

if __name__ == "__main__":
    ft.app(target=main)
