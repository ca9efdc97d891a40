"""Command line interface for zumotest."""
