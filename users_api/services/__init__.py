"""
High-level use cases for the users API.

Routers call UserService instead of opening database sessions directly.
"""
