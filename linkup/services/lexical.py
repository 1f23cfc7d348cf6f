import re

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "must", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
})

MAX_KEYWORDS = 8
MIN_KEYWORD_TEXT_LENGTH = 50

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_SENTENCE_BOUNDARY_RE = re.compile(r"[.!?]+")


def count_words(text: str | None) -> int:
    if not text:
        return 0
    return len(text.split())


def split_sentences(text: str) -> list[str]:
    """Split on runs of . ! ? and drop blank segments."""
    return [s for s in _SENTENCE_BOUNDARY_RE.split(text) if s.strip()]


def extract_keywords(text: str | None, max_keywords: int = MAX_KEYWORDS) -> list[str]:
    """
    Return up to max_keywords words ranked by frequency.
    Ties keep first-seen order. Stop-words and words of 3 chars or fewer are skipped.
    """
    if not text or len(text) < MIN_KEYWORD_TEXT_LENGTH:
        return []

    frequencies: dict[str, int] = {}
    for word in _PUNCTUATION_RE.sub("", text.lower()).split():
        if len(word) > 3 and word not in STOP_WORDS:
            frequencies[word] = frequencies.get(word, 0) + 1

    ranked = sorted(frequencies.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:max_keywords]]
