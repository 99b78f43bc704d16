"""Driving distance lookup via the Google Distance Matrix API."""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"
METERS_PER_MILE = 1609.34
REQUEST_TIMEOUT = 10


class DistanceClient:
    def __init__(self, api_key: Optional[str], *, url: str = DISTANCE_MATRIX_URL, timeout: float = REQUEST_TIMEOUT) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def lookup(self, origin: str, destination: str) -> Optional[Dict[str, Any]]:
        """Return ``{"miles", "distance_text", "duration_text"}`` or ``None``.

        Any failure leaves the mileage unset; callers fall back to manual
        entry.
        """

        if not origin or not destination or not self.api_key:
            logger.warning("Distance lookup skipped: missing origin, destination or API key")
            return None
        try:
            response = requests.get(
                self.url,
                params={
                    "origins": origin,
                    "destinations": destination,
                    "units": "imperial",
                    "key": self.api_key,
                },
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Distance lookup failed: %s", exc)
            return None

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            element = {}
        if data.get("status") != "OK" or element.get("status") != "OK":
            logger.warning(
                "Distance lookup rejected: %s", data.get("error_message") or data.get("status")
            )
            return None

        meters = element["distance"]["value"]
        return {
            "miles": round_miles(meters),
            "distance_text": element["distance"].get("text", ""),
            "duration_text": element.get("duration", {}).get("text", ""),
        }

    def miles(self, origin: str, destination: str) -> Optional[int]:
        result = self.lookup(origin, destination)
        return result["miles"] if result else None


def round_miles(meters: float) -> int:
    # halves round up
    return math.floor(meters / METERS_PER_MILE + 0.5)
