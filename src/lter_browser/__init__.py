"""
LTER Station Browser

This package resolves measurement groups against an InfluxDB catalog,
builds the InfluxQL statements for a request and rebuilds the returned
rows into continuous 15 minute series.
"""

__version__ = "0.1.0"
__author__ = "Eurac Research"
__description__ = "Time series query and reconstruction for LTER stations"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "DataBrowser":
        from .browser import DataBrowser
        return DataBrowser
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DataBrowser",
]
