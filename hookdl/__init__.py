"""Hookdl - webhook receiver that feeds the download/upload pipeline."""

__version__ = "0.1.0"
