"""Browsable HTML documentation for Go modules."""

__version__ = "0.1.0"
