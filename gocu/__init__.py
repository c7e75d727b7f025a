"""A small command-line HTTP client with reusable placeholder variables."""

__version__ = "0.1.0"