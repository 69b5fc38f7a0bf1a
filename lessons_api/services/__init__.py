"""Business logic services.

This package contains service classes for token checks, file uploads and
background notifications.
"""
