"""Look up the registrant and administrative contacts of autonomous systems."""

__version__ = "0.1.0"
