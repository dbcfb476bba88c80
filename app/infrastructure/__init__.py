"""Infrastructure: persistence, cache, identity provider and security adapters."""
