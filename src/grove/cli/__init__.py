"""Command line interface for grove."""
