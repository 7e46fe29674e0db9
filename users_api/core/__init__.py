"""
Core utilities shared across the users API.

Configuration, logging setup, error types and the paginator live here so that
routers/services do not read os.environ or build error payloads by hand.
"""
