"""Flet desktop front-end."""
