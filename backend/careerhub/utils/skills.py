"""Keyword-based skill detection over resume text."""

from __future__ import annotations

from typing import Dict, List, Optional

MAX_SKILLS = 10

SKILLS: Dict[str, List[str]] = {
    'technical': [
        'JavaScript', 'Python', 'Java', 'C++', 'React', 'Node.js', 'Angular', 'Vue.js',
        'SQL', 'MongoDB', 'PostgreSQL', 'AWS', 'Azure', 'Docker', 'Kubernetes',
        'Git', 'REST API', 'GraphQL', 'TypeScript', 'HTML', 'CSS', 'Machine Learning',
        'Data Science', 'AI', 'Cloud Computing', 'DevOps', 'Agile', 'Scrum',
    ],
    'finance': [
        'Financial Accounting', 'Taxation', 'GST', 'Tally', 'Excel', 'Financial Analysis',
        'Auditing', 'Cost Accounting', 'Financial Reporting', 'Budgeting', 'Forecasting',
        'SAP', 'QuickBooks', 'Business Analytics', 'Financial Modeling', 'Compliance',
    ],
    'soft': [
        'Communication', 'Leadership', 'Team Management', 'Problem Solving',
        'Critical Thinking', 'Time Management', 'Project Management', 'Presentation',
    ],
}

DEFAULT_SKILLS = {
    'technical': ['JavaScript', 'React', 'Node.js', 'SQL', 'Git'],
    'finance': ['Excel', 'Financial Accounting', 'Tally', 'Taxation', 'Business Analytics'],
}

_COMPUTER_KEYWORDS = ('bca', 'mca', 'b.tech', 'computer')
_COMMERCE_KEYWORDS = ('bcom', 'mba', 'commerce', 'finance')


def education_group(education: Optional[str]) -> Optional[str]:
    """Map an education string to 'technical', 'finance' or None."""
    if not education:
        return None
    edu = education.lower()
    if any(k in edu for k in _COMPUTER_KEYWORDS):
        return 'technical'
    if any(k in edu for k in _COMMERCE_KEYWORDS):
        return 'finance'
    return None


def detect_skills(resume_text: str, education: Optional[str] = None) -> List[str]:
    """Return every known skill mentioned in `resume_text`, without duplicates.

    The skill group matching the education is checked first so it leads
    the list. When nothing matches, a default set for the education group
    is returned instead. Matching is a plain case-insensitive substring
    test, so short names like "AI" or "Java" also hit inside longer words.
    """
    text = resume_text.lower()
    group = education_group(education)
    ordered = list(SKILLS[group]) if group else []
    ordered += SKILLS['technical'] + SKILLS['finance'] + SKILLS['soft']
    detected: List[str] = []
    for skill in ordered:
        if skill not in detected and skill.lower() in text:
            detected.append(skill)
    if not detected and group:
        detected = list(DEFAULT_SKILLS[group])
    return detected
