"""Headless-browser export runner for the SEACE public procurement search."""

__version__ = "0.1.0"
