"""Test doubles standing in for the application's collaborators."""
