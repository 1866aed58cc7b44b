"""Offline unit tests for the suite building blocks."""
