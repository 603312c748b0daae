"""Shared utilities: datetime, generators."""

from itam.shared.utils.datetime import utc_now
from itam.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
]
