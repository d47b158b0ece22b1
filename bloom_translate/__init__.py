"""Batch translation of BloomBook spreadsheet columns."""

__version__ = "0.3.0"
