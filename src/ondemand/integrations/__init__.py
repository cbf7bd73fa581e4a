"""Integrations with the host environment: processes, pip, imports, config."""
