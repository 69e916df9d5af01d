"""Unit tests for logging utilities."""
