"""Command line tools for the text overlay helpers."""
