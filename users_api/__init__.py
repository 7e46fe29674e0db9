"""REST API for user records and their key/value settings."""

__version__ = "0.1.0"
