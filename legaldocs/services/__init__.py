"""Domain services for extraction, review and saved profiles."""
