"""Assay installer CLI: a single Typer command configured from ``ASSAY_*``.

All output uses Rich for formatted terminal display.
"""
