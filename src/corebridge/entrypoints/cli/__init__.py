"""Command-line interface for COREBRIDGE."""
