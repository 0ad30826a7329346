"""Services used by the CLI commands."""
