"""Core building blocks: exceptions and the external API client."""
