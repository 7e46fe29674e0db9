"""Domain helpers for user records."""
