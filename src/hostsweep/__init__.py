"""hostsweep: keyword-driven host forensic sweep."""

__version__ = "0.1.0"
