"""Stratum - hierarchical permission evaluation."""

__version__ = "0.1.0"
