"""AWS resource tag discovery and Prometheus info-metric materialization."""

__version__ = "0.1.0"
