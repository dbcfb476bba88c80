"""Repository tests against Postgres."""
