"""
Routes package for the Todo List application.

This package contains route blueprints:
- auth: login, logout and the login guard
- pages: static HTML pages
- todos: JSON and form endpoints that read and change todos
"""
