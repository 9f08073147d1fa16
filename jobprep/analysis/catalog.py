"""Lookup helpers over the static coding-challenge catalog."""

import random
from functools import lru_cache
from typing import Any

from jobprep.analysis.reference import load_coding_catalog
from jobprep.core.schemas import CodingQuestion, Difficulty


@lru_cache(maxsize=1)
def _index() -> dict[str, CodingQuestion]:
    return {q.id: q for q in load_coding_catalog()}


def get_question(question_id: str) -> CodingQuestion:
    """Return the catalog entry with this id. Raises KeyError if unknown."""
    try:
        return _index()[question_id]
    except KeyError:
        msg = f"No coding question with id '{question_id}'"
        raise KeyError(msg) from None


def get_all_coding_questions() -> list[CodingQuestion]:
    return list(load_coding_catalog())


def get_coding_questions_by_difficulty(difficulty: Difficulty) -> list[CodingQuestion]:
    return [q for q in load_coding_catalog() if q.difficulty == difficulty]


def get_coding_questions_by_category(category: str) -> list[CodingQuestion]:
    """Case-insensitive category match."""
    wanted = category.lower()
    return [q for q in load_coding_catalog() if q.category.lower() == wanted]


def search_coding_questions(tags: list[str]) -> list[CodingQuestion]:
    """Questions carrying any of the given tags. No tags returns the whole catalog."""
    if not tags:
        return get_all_coding_questions()
    wanted = {tag.lower() for tag in tags}
    return [q for q in load_coding_catalog() if wanted.intersection(q.tags)]


def get_random_coding_question(
    difficulty: Difficulty | None = None,
    rng: random.Random | None = None,
) -> CodingQuestion:
    """Pick a random question, optionally restricted to one difficulty."""
    pool = get_coding_questions_by_difficulty(difficulty) if difficulty else get_all_coding_questions()
    if not pool:
        msg = f"No coding questions with difficulty '{difficulty}'"
        raise ValueError(msg)
    return (rng or random).choice(pool)


def get_question_stats() -> dict[str, Any]:
    """Counts by difficulty plus the distinct categories and tags, in catalog order."""
    catalog = load_coding_catalog()
    categories = list(dict.fromkeys(q.category for q in catalog))
    tags = list(dict.fromkeys(tag for q in catalog for tag in q.tags))
    return {
        "total": len(catalog),
        "by_difficulty": {
            level: sum(1 for q in catalog if q.difficulty == level) for level in ("easy", "medium", "hard")
        },
        "categories": categories,
        "all_tags": tags,
    }
