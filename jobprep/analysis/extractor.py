"""Keyword and regex extraction over job posting text.

Every function here is total: unmatched input degrades to an empty list or a
default value, never an exception.

Matching rules:
  - skills: word-boundary match over "<title> <description>", case-insensitive
  - technical stacks: substring any-of over the lowercased description
  - role: leading word-boundary any-of, groups tried in declaration order
  - experience: ordered unanchored regexes, first match wins
"""

import logging
import re

from jobprep.analysis.reference import load_patterns, load_skill_table
from jobprep.core.schemas import CompanyInfo, ExperienceLevel, RoleType

logger = logging.getLogger(__name__)

# Splits a responsibilities section into candidate lines.
_BULLET_SPLIT = re.compile(r"[•\-*\n]")
_MIN_RESPONSIBILITY_LENGTH = 10


def _keyword_regex(keyword: str) -> re.Pattern[str]:
    # (?<!\w)/(?!\w) behave like \b for word characters and also let
    # keywords ending in symbols (c++, c#) match.
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


def _prefix_regex(keyword: str) -> re.Pattern[str]:
    # Leading boundary only: "servers" and "developers" still hit, "build" does not hit "ui".
    return re.compile(rf"(?<!\w){re.escape(keyword)}", re.IGNORECASE)


def format_skill(keyword: str) -> str:
    """Capitalize the first character of each space-separated token."""
    return " ".join(word[:1].upper() + word[1:] for word in keyword.split(" "))


def extract_section(text: str, headings: list[str]) -> str | None:
    """Return the text after the first heading found, up to the next blank line.

    Headings are tried in order; the first one that matches wins even if a
    later heading appears earlier in the text. Returns None if none match.
    """
    for heading in headings:
        pattern = re.compile(rf"{re.escape(heading)}[:\s](.*?)(?=\n\n|$)", re.IGNORECASE | re.DOTALL)
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def find_skill_candidates(title: str, description: str) -> list[str]:
    """All catalog skills mentioned in title or description, formatted and deduplicated."""
    context = f"{title} {description}".lower()
    found: dict[str, None] = {}
    for keywords in load_skill_table().values():
        for keyword in keywords:
            if _keyword_regex(keyword).search(context):
                found.setdefault(format_skill(keyword), None)
    return list(found)


def extract_skills(title: str, description: str, *, required: bool) -> list[str]:
    """Required (or preferred) skills for a posting.

    If the description has a "Required:" (or "Preferred:") style section, only
    skills named inside it are kept. Without such a section every detected
    skill is returned, so required and preferred can overlap completely.
    """
    candidates = find_skill_candidates(title, description)
    headings = load_patterns().section_headings
    section = extract_section(description, headings.required if required else headings.preferred)
    if section is None:
        return candidates
    section_lower = section.lower()
    return [skill for skill in candidates if skill.lower() in section_lower]


def extract_technical_stack(description: str) -> list[str]:
    """Names of architecture stacks with at least one token in the description."""
    text = description.lower()
    return [
        name
        for name, tokens in load_patterns().technical_stacks.items()
        if any(token in text for token in tokens)
    ]


def classify_role(title: str, description: str) -> RoleType:
    """First role group with any indicator present; "other" if none."""
    context = f"{title} {description}".lower()
    for role, indicators in load_patterns().role_indicators.items():
        if any(_prefix_regex(indicator).search(context) for indicator in indicators):
            return role
    return "other"


def classify_experience(title: str, description: str) -> ExperienceLevel:
    """Seniority from ordered regex checks (senior, lead, entry); default "mid"."""
    context = f"{title} {description}"
    for rule in load_patterns().experience_levels:
        if re.search(rule.pattern, context, re.IGNORECASE):
            return rule.level
    return "mid"


def extract_responsibilities(description: str, limit: int = 8) -> list[str]:
    """Bullet lines from the responsibilities section, or the generic fallback list."""
    patterns = load_patterns()
    section = extract_section(description, patterns.section_headings.responsibilities)
    lines: list[str] = []
    if section:
        lines = [
            part.strip()
            for part in _BULLET_SPLIT.split(section)
            if len(part.strip()) > _MIN_RESPONSIBILITY_LENGTH
        ][:limit]
    if not lines:
        logger.debug("No responsibilities section found, using fallback list")
        return list(patterns.fallback_responsibilities)
    return lines


def extract_company_info(description: str) -> CompanyInfo:
    """Company size, industry, and culture tags from independent regex checks."""
    rules = load_patterns().company_info

    size = rules.size.default
    for rule in rules.size.rules:
        if re.search(rule.pattern, description, re.IGNORECASE):
            size = rule.value

    industry = rules.industry.default
    for rule in rules.industry.rules:
        if re.search(rule.pattern, description, re.IGNORECASE):
            industry = rule.value

    culture = [rule.value for rule in rules.culture if re.search(rule.pattern, description, re.IGNORECASE)]
    return CompanyInfo(size=size, industry=industry, culture=culture)
