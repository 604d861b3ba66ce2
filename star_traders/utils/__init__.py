"""Validation and rendering helpers."""
