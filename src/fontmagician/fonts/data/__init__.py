"""Prepackaged font catalogs (``bootstrap`` and ``google`` foundries)."""
