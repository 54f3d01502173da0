"""Utility helpers for statement handling and error reporting."""
