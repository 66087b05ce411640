"""Shared validation schemas for the occupational-health records system."""

__version__ = "1.0.0"
