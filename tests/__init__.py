"""Tests for the calendar notification service."""
