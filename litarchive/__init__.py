"""Literary archive publication service."""

__version__ = "0.1.0"
