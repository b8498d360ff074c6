"""Venue dashboard configuration and feature resolution."""

__version__ = "1.0.0"
