"""Command line interface for tsformat."""
