"""Ingestion layer.

This package turns raw feed bodies into frozen domain objects. It knows the
vendor JSON shape; nothing downstream of it does.
"""

from pysiri.ingestion.decoder import decode_service_delivery

__all__ = ["decode_service_delivery"]
