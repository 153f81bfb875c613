"""
Test suite for the Todo List application.

This package contains:
- unit/: Models, user store, session store and file system
- integration/: Routes exercised through the Flask test client
- security/: Cookie hardening and session handling
- mocks/: In-memory test doubles
"""
