"""Unit tests (no HTTP, no database)."""
