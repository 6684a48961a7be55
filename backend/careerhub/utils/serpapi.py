"""SerpAPI Google Jobs client.

Failures never propagate: the job search endpoint treats the external
source as best-effort and falls back to local results only.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from .job_formatting import normalize_serp_job

SERPAPI_URL = "https://serpapi.com/search.json"
DEFAULT_QUERY = "software developer"
DEFAULT_LOCATION = "India"

_LOGGER = logging.getLogger("careerhub.jobs")


def fetch_serp_results(
    search_term: str,
    location: str,
    api_key: str,
    timeout_s: float = 15.0,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """Return the raw `jobs_results` list for a query, or [] on any failure."""
    params = {
        "engine": "google_jobs",
        "q": search_term or DEFAULT_QUERY,
        "location": location or DEFAULT_LOCATION,
        "hl": "en",
        "api_key": api_key,
    }
    http = session or requests
    try:
        response = http.get(SERPAPI_URL, params=params, timeout=timeout_s)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as exc:
        _LOGGER.warning("serpapi_request_failed %s", json.dumps({"error": str(exc), "q": params["q"]}))
        return []
    except ValueError as exc:
        _LOGGER.warning("serpapi_invalid_json %s", json.dumps({"error": str(exc), "q": params["q"]}))
        return []
    if not isinstance(data, dict):
        return []
    if data.get("error"):
        _LOGGER.warning("serpapi_error %s", json.dumps({"error": str(data["error"]), "q": params["q"]}))
        return []
    results = data.get("jobs_results") or []
    return [r for r in results if isinstance(r, dict)]


def fetch_jobs_from_serpapi(
    search_term: str,
    location: str,
    api_key: str,
    timeout_s: float = 15.0,
) -> List[Dict[str, Any]]:
    """Fetch and normalize Google Jobs listings.

    Returns an empty list when no API key is configured.
    """
    if not api_key:
        _LOGGER.info("serpapi_skipped no api key configured")
        return []
    raw = fetch_serp_results(search_term, location, api_key, timeout_s=timeout_s)
    jobs = []
    for result in raw:
        try:
            jobs.append(normalize_serp_job(result, requested_location=location))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            _LOGGER.warning(
                "serpapi_normalize_failed %s",
                json.dumps({"error": str(exc), "job_id": str(result.get("job_id"))}),
            )
    _LOGGER.info("serpapi_fetched %s", json.dumps({"count": len(jobs), "q": search_term or DEFAULT_QUERY}))
    return jobs
