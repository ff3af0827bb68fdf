"""Installer pipeline stages and the orchestrating pipeline."""
