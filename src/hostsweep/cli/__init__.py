"""hostsweep CLI layer."""
