"""Filmtech OS session core: session resolution, onboarding and tutorial API."""
