"""Infrastructure layer: persistence, event delivery and the HTTP API."""
