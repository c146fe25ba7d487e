"""Command-line interface for struct-diff."""
