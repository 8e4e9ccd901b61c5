"""Folder time tracker: accrues time spent with tracked workspace folders open."""
__version__ = "0.1.0"
