#!/usr/bin/env python3
"""Poll a SIRI Lite estimated-timetable feed and summarise each result.

Usage
-----
Set environment variables and run::

    export SIRI_URL="https://example.org/siri-lite/estimated-timetable.json"
    python scripts/poll_feed.py

Options::

    --url URL            Feed URL (overrides SIRI_URL)
    --feed-id ID         Feed id to report (overrides SIRI_FEED_ID)
    --count N            Number of polls (default: 1)
    --interval SECONDS   Pause between polls (default: 30)
    --json               Print accepted deliveries as JSON
    --file PATH          Decode a saved feed body instead of fetching
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysiri import (  # noqa: E402
    Accepted,
    ServiceDelivery,
    SiriConfig,
    SiriDecodeError,
    SiriLiteEtSource,
    decode_service_delivery,
)

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _summarise(result: Accepted) -> list[str]:
    journeys = [
        journey
        for delivery in result.deliveries
        for frame in delivery.version_frames
        for journey in frame.vehicle_journeys
    ]
    calls = sum(len(journey.estimated_calls) for journey in journeys)
    lines = [
        f"  producer  : {result.producer_ref}",
        f"  timestamp : {result.response_timestamp.isoformat()}",
        f"  mode      : {result.mode.value}",
        f"  journeys  : {len(journeys)}",
        f"  calls     : {calls}",
    ]
    lines.extend(sorted({f"    line {journey.line_ref}" for journey in journeys})[:20])
    return lines


def _deliveries_json(result: Accepted) -> list[dict[str, Any]]:
    return [delivery.model_dump(mode="json", by_alias=True) for delivery in result.deliveries]


def _decode_file(path: str, json_mode: bool) -> int:
    raw = Path(path).read_bytes()
    try:
        delivery: ServiceDelivery = decode_service_delivery(raw)
    except SiriDecodeError as exc:
        print(f"decode failed ({exc.describe()}): {exc}", file=sys.stderr)
        return 1
    if json_mode:
        print(json.dumps(delivery.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    else:
        print(_section(f"{path}"))
        print(f"  producer  : {delivery.producer_ref}")
        print(f"  timestamp : {delivery.response_timestamp.isoformat()}")
        print(f"  journeys  : {len(delivery.vehicle_journeys)}")
    return 0


# ── main ─────────────────────────────────────────────────────


async def main() -> int:
    parser = argparse.ArgumentParser(description="Poll a SIRI Lite ET feed")
    parser.add_argument("--url", help="Feed URL (overrides SIRI_URL)")
    parser.add_argument("--feed-id", help="Feed id (overrides SIRI_FEED_ID)")
    parser.add_argument("--count", type=int, default=1, help="Number of polls")
    parser.add_argument("--interval", type=float, default=30.0, help="Seconds between polls")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="Print accepted deliveries as JSON")
    parser.add_argument("--file", help="Decode a saved feed body instead of fetching")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.file:
        return _decode_file(args.file, args.json_mode)

    overrides: dict[str, Any] = {}
    if args.url:
        overrides["url"] = args.url
    if args.feed_id:
        overrides["feed_id"] = args.feed_id
    config = SiriConfig.from_env(**overrides)

    async with SiriLiteEtSource(config) as source:
        print(_section(f"{source!r} feed_id={source.feed_id}"))
        for attempt in range(1, args.count + 1):
            if attempt > 1 and args.interval > 0:
                await asyncio.sleep(args.interval)

            result = await source.poll()
            if not isinstance(result, Accepted):
                print(f"  poll {attempt}: no update ({result.reason.value})")
                continue

            if args.json_mode:
                print(json.dumps(_deliveries_json(result), indent=2, ensure_ascii=False))
            else:
                print(f"  poll {attempt}: accepted")
                print("\n".join(_summarise(result)))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
