"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import epoch_ms, generate_cuid, utc_now

__all__ = [
    "epoch_ms",
    "generate_cuid",
    "utc_now",
]
