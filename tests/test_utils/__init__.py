"""Shared helpers for building cache slots and simulating pip in tests."""
