"""Vendored support libraries for helpman."""
