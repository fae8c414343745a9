"""EDI document catalog classification and versioning."""

__version__ = "0.1.0"
