"""Logical solver and difficulty estimator for Hexcells puzzle levels."""

__version__ = "0.1.0"