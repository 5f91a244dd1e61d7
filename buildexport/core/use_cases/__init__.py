"""Use cases — what the CLI commands do."""
