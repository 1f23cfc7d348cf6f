import logging
from typing import Sequence
from urllib.parse import urlparse

from linkup.models.analysis import DuplicateAssessment
from linkup.models.bookmark import Bookmark

logger = logging.getLogger(__name__)

DUPLICATE_THRESHOLD = 0.8
DOMAIN_WEIGHT = 0.6
TITLE_WEIGHT = 0.4


def levenshtein_distance(a: str, b: str) -> int:
    # rows index b, columns index a
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,
                    matrix[i][j - 1] + 1,
                    matrix[i - 1][j] + 1,
                )

    return matrix[len(b)][len(a)]


def calculate_similarity(a: str, b: str) -> float:
    """Edit-distance similarity in [0, 1], normalised by the longer string."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    longer, shorter = (a, b) if len(a) > len(b) else (b, a)
    return (len(longer) - levenshtein_distance(longer, shorter)) / len(longer)


def overall_similarity(domain_similarity: float, title_similarity: float) -> float:
    return DOMAIN_WEIGHT * domain_similarity + TITLE_WEIGHT * title_similarity


def _hostname(url: str) -> str:
    """Raises ValueError for URLs without a scheme and host."""
    parsed = urlparse(url)
    hostname = parsed.hostname
    if not parsed.scheme or not hostname:
        raise ValueError(f"not an absolute URL: {url!r}")
    return hostname


def check_duplicates(
    new_url: str,
    existing: Sequence[Bookmark],
    threshold: float = DUPLICATE_THRESHOLD,
) -> DuplicateAssessment:
    """
    Score new_url against every existing bookmark and keep the best match.

    Each candidate scores 0.6 * hostname similarity + 0.4 * similarity between the
    lowercased new URL and the candidate's name. A score strictly above threshold
    is a duplicate. Candidates with unparseable URLs are skipped.
    """
    if not existing:
        return DuplicateAssessment()

    try:
        new_domain = _hostname(new_url)
    except ValueError:
        logger.info("[duplicates] new url not parseable | url=%s", new_url)
        return DuplicateAssessment()

    max_similarity = 0.0
    best_match: Bookmark | None = None

    for candidate in existing:
        try:
            candidate_domain = _hostname(candidate.url)
        except ValueError:
            logger.debug("[duplicates] skipping candidate | id=%s | url=%s", candidate.id, candidate.url)
            continue

        domain_similarity = calculate_similarity(new_domain, candidate_domain)
        title_similarity = 0.0
        if candidate.name:
            title_similarity = calculate_similarity(new_url.lower(), candidate.name.lower())

        score = overall_similarity(domain_similarity, title_similarity)
        if score > max_similarity:
            max_similarity = score
            best_match = candidate

    max_similarity = min(max(max_similarity, 0.0), 1.0)
    return DuplicateAssessment(
        is_duplicate=max_similarity > threshold,
        similarity_score=max_similarity,
        matched_bookmark_id=best_match.id if best_match else None,
    )
