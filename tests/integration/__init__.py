"""
Route tests for the Todo List application.

Tests use the Flask test client and cover:
- Login, logout and the login guard
- Static pages and unmatched routes
- Todo and item endpoints
- The add-user command
"""
