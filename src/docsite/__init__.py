"""Content indexing and metadata API for the documentation site."""

__version__ = "0.1.0"
