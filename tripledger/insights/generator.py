"""Mini README: Operational insight reports via the Gemini REST API.

Structure:
    * build_prompt - analyst prompt embedding trips, active staff and rates.
    * InsightGenerator - one async ``generateContent`` call per report.

Only the 20 most recent trips are sent to keep the request small. The
generator is the sole asynchronous boundary of the package; it issues a
single request, does not retry and turns every failure into a message the
dashboard can display as-is.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional

import httpx

from ..logging_utils import get_logger
from ..rates import RateSettings
from ..staff import StaffMember
from ..trips import Trip

LOGGER = get_logger(__name__)

API_ROOT = "https://generativelanguage.googleapis.com/v1beta"
RECENT_TRIPS = 20

MISSING_KEY_MESSAGE = "API key not found. Configure TRIPLEDGER_GEMINI_API_KEY to enable insights."
INSIGHTS_UNAVAILABLE_MESSAGE = "Insights could not be generated right now."
INSIGHTS_FAILED_MESSAGE = "Could not reach the text-generation service. Check the API key and connectivity."

_PROMPT_TEMPLATE = """\
Act as a financial analyst and logistics manager for a small medical freight company.
Below is recent operational data in JSON (trips, crew and cost settings).

Analyse it and write a short, direct, professional report in Markdown.

Focus on:
1. Cost efficiency (weekend versus weekday spending).
2. The most active drivers and helpers.
3. Savings suggestions based on the job type pattern (MRI versus CT).
4. Any abnormally high expense.

Data:
{data}
"""


def build_prompt(trips: Iterable[Trip], staff: Iterable[StaffMember], settings: RateSettings) -> str:
    """Render the analyst prompt for the given operations snapshot."""

    trip_list: List[Trip] = list(trips)
    recent = sorted(trip_list, key=lambda trip: (trip.date, trip.trip_id), reverse=True)[:RECENT_TRIPS]
    payload = {
        "totalTrips": len(trip_list),
        # The logo is an opaque image string and only inflates the request.
        "settings": settings.model_dump(by_alias=True, exclude={"logo"}),
        "recentTrips": [trip.as_dict() for trip in recent],
        "staff": [
            {"name": member.name, "role": member.role.label} for member in staff if member.active
        ],
    }
    return _PROMPT_TEMPLATE.format(data=json.dumps(payload, ensure_ascii=False))


class InsightGenerator:
    """Ask the Gemini API for a written analysis of recent operations."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gemini-2.5-flash",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    async def generate_insights(
        self,
        trips: Iterable[Trip],
        staff: Iterable[StaffMember],
        settings: RateSettings,
    ) -> str:
        if not self.api_key:
            LOGGER.warning("Insight requested without an API key")
            return MISSING_KEY_MESSAGE

        prompt = build_prompt(trips, staff, settings)
        url = f"{API_ROOT}/models/{self.model}:generateContent"
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, params={"key": self.api_key}, json=body)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.exception("Insight request failed: %s", exc)
            return INSIGHTS_FAILED_MESSAGE

        text = _extract_text(data)
        if not text:
            LOGGER.warning("Insight response carried no text")
            return INSIGHTS_UNAVAILABLE_MESSAGE
        LOGGER.info("Generated insight report (%s characters)", len(text))
        return text


def _extract_text(data: object) -> str:
    """Concatenate the text parts of the first candidate, if any."""

    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict)).strip()
