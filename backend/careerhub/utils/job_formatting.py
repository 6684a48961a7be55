"""Normalization helpers for job listings.

The external search API returns a loosely structured payload per job
(free-text salary strings, optional highlight sections in two different
shapes, optional extensions). These helpers turn one such payload, or a
local `Job` row, into the flat listing shape returned by `/jobs/search`.
All functions here are pure.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

BULLET = "•"

DEFAULT_SALARY = 800_000
_TITLE_SALARY_RULES = (
    (("senior", "lead", "principal"), 1_500_000),
    (("junior", "fresher", "entry"), 400_000),
    (("manager",), 2_000_000),
)

_HIGHLIGHT_SECTIONS = (
    ("Qualifications", "Required Qualifications"),
    ("Responsibilities", "Key Responsibilities"),
    ("Benefits", "Benefits"),
)

_LEADING_BULLET_RE = re.compile(r"^[•\-\*]\s*", re.MULTILINE)
_SENTENCE_SPLIT_RE = re.compile(r"\n+|\.(?=\s+[A-Z])|;")
_NUMBER_RE = re.compile(r"\d[\d,]*")


def format_description_to_points(description: Optional[str]) -> str:
    """Rewrite free text as one bullet point per sentence.

    Existing bullets are stripped, the text is split on newlines,
    sentence boundaries and semicolons, and fragments of 10 characters or
    fewer are dropped. If fewer than two fragments survive the original
    text is returned untouched.
    """
    if not description:
        return ""
    cleaned = _LEADING_BULLET_RE.sub("", description)
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(cleaned)]
    sentences = [s for s in sentences if len(s) > 10]
    if len(sentences) > 1:
        return "\n".join(f"{BULLET} {re.sub(r'[.]$', '', s)}" for s in sentences)
    return description


def salary_from_text(salary_text: Any) -> int:
    """Convert a free-text salary ("5 LPA", "₹40,000 a month") to annual INR.

    Only the first number is used. Returns 0 when no number is present.
    A numeric (non-string) value is already an annual amount.
    """
    if not salary_text:
        return 0
    if isinstance(salary_text, (int, float)) and not isinstance(salary_text, bool):
        return int(salary_text)
    text = str(salary_text).lower()
    match = _NUMBER_RE.search(text)
    if not match:
        return 0
    value = int(match.group(0).replace(",", ""))
    if "lakh" in text or "lpa" in text:
        return value * 100_000
    if "month" in text:
        return value * 12
    if "year" in text or "annual" in text:
        return value
    # bare numbers on Indian listings are almost always lakhs
    return value * 100_000


def salary_from_title(title: Optional[str]) -> int:
    """Estimate an annual INR salary from seniority keywords in the title."""
    lowered = (title or "").lower()
    for keywords, amount in _TITLE_SALARY_RULES:
        if any(k in lowered for k in keywords):
            return amount
    return DEFAULT_SALARY


def infer_salary(salary_text: Optional[str], title: Optional[str]) -> int:
    """Parsed salary when the listing states one, otherwise a title estimate."""
    return salary_from_text(salary_text) or salary_from_title(title)


def _highlight_items(highlights: Any) -> Dict[str, List[str]]:
    """Flatten both highlight shapes into ``{section title: [items]}``.

    Accepts a mapping (``{"Qualifications": [...]}``) or the list form
    (``[{"title": "Qualifications", "items": [...]}]``). Items may be
    plain strings or ``{"title": ...}`` objects.
    """
    sections: Dict[str, List[Any]] = {}
    if isinstance(highlights, dict):
        sections = {str(k): v for k, v in highlights.items() if isinstance(v, list)}
    elif isinstance(highlights, list):
        for block in highlights:
            if isinstance(block, dict) and block.get("title") and isinstance(block.get("items"), list):
                sections.setdefault(str(block["title"]), []).extend(block["items"])
    out: Dict[str, List[str]] = {}
    for name, items in sections.items():
        texts = []
        for item in items:
            text = item.get("title") if isinstance(item, dict) else item
            if text:
                texts.append(str(text).strip())
        out[name] = [t for t in texts if t]
    return out


def build_serp_description(job: Dict[str, Any]) -> str:
    """Assemble a listing description from the text and highlight sections."""
    parts: List[str] = []
    if job.get("description"):
        parts.append(job["description"])
    highlights = _highlight_items(job.get("job_highlights"))
    for key, heading in _HIGHLIGHT_SECTIONS:
        items = highlights.get(key) or []
        if items:
            parts.append(f"\n**{heading}:**")
            parts.extend(f"{BULLET} {item}" for item in items)
    extensions = job.get("detected_extensions") or {}
    if extensions.get("work_from_home"):
        parts.append(f"\n{BULLET} Remote/Work from home available")
    return "\n".join(parts)


def _first_apply_link(job: Dict[str, Any]) -> Optional[str]:
    if job.get("share_link"):
        return job["share_link"]
    for option in job.get("apply_options") or []:
        if isinstance(option, dict) and option.get("link"):
            return option["link"]
    return None


def normalize_serp_job(job: Dict[str, Any], requested_location: str = "") -> Dict[str, Any]:
    """Map one Google Jobs result onto the listing shape."""
    extensions = job.get("detected_extensions") or {}
    title = job.get("title") or ""
    description = build_serp_description(job)
    if not description:
        description = format_description_to_points(job.get("snippet") or "No description available")
    return {
        "id": job.get("job_id") or f"serp-{uuid.uuid4().hex}",
        "title": title,
        "company": job.get("company_name"),
        "location": job.get("location") or requested_location or "India",
        "salary": infer_salary(extensions.get("salary"), title),
        "description": description,
        "type": extensions.get("schedule_type") or "Full-time",
        "posted_date": extensions.get("posted_at") or datetime.now(timezone.utc).isoformat(),
        "source": "serpapi",
        "apply_link": _first_apply_link(job),
        "thumbnail": job.get("thumbnail"),
        "extensions": list(job.get("extensions") or []),
    }


def local_job_to_listing(job) -> Dict[str, Any]:
    """Map a stored `Job` row onto the listing shape."""
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "salary": job.salary,
        "description": format_description_to_points(job.description),
        "type": job.job_type,
        "posted_date": job.posted_date,
        "source": "local",
        "apply_link": None,
        "thumbnail": None,
        "extensions": [],
    }


def within_salary_range(listing: Dict[str, Any], min_salary: int, max_salary: int) -> bool:
    return min_salary <= int(listing.get("salary") or 0) <= max_salary
