"""Base model and timestamp helpers for SIRI domain objects.

Every domain model inherits from :class:`SiriBaseModel` which provides:

* ``alias_generator=to_camel`` so snake_case fields round-trip to the
  camelCase keys SIRI Lite uses (``model_dump(by_alias=True)``).
* ``frozen=True``: decoded deliveries are handed to consumers and never
  mutated afterwards.
* ``extra="forbid"``: domain objects are built by the decoder, never from
  unchecked payloads, so unknown keys are a programming error.
"""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Zoned serializers append the region id, e.g. "...+01:00[Europe/Paris]".
_ZONE_ID_SUFFIX = re.compile(r"\[[^\]]*\]$")


def parse_siri_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 SIRI timestamp into a timezone-aware datetime.

    Accepts an explicit offset or ``Z``, optional fractional seconds and an
    optional trailing ``[Region/City]`` zone id (ignored; the offset wins).

    Raises :class:`ValueError` for unparsable or timezone-naive values.
    """
    text = _ZONE_ID_SUFFIX.sub("", value.strip())
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return parsed


class SiriBaseModel(BaseModel):
    """Base for SIRI domain models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )
