"""Quiz Portal REST API."""
