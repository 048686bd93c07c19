"""Shared helpers for contentshape tests."""
