"""Komendy CLI esys — każda komenda w osobnym module (add_parser + run)."""
