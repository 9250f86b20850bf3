"""HTTP API for extraction review and saved profiles."""
