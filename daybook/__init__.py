"""Daybook - date organized journal entries and notes"""

__version__ = "0.1.0"
