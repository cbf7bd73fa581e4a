"""Acquisition, cache and load services."""
