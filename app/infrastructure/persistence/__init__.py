"""Persistence: async engine, ORM models and repositories."""
