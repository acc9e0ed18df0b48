"""Command-line interface for ext-harness."""
