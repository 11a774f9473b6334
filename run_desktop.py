#!/usr/bin/env python
"""Desktop app entrypoint for the PTA ledger."""

import flet as ft

from ptaledger.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
