import math
from dataclasses import dataclass
from typing import Callable

from linkup.services.lexical import split_sentences

WORDS_PER_MINUTE = 200
MIN_READ_TIME = 1
MAX_READ_TIME = 30
DEFAULT_COMPLEXITY = 0.5

POSITIVE_WORDS = frozenset({
    "good", "great", "excellent", "amazing", "wonderful", "best",
    "love", "like", "happy", "success", "awesome", "fantastic",
})
NEGATIVE_WORDS = frozenset({
    "bad", "terrible", "awful", "worst", "hate", "dislike",
    "sad", "fail", "error", "problem", "horrible", "disappointing",
})


@dataclass(frozen=True)
class PageHints:
    """Structural facts about the fetched page that the content-type rules look at."""

    has_video: bool = False
    image_count: int = 0


def _mentions(*needles: str) -> Callable[[str, PageHints], bool]:
    def predicate(haystack: str, hints: PageHints) -> bool:
        return any(needle in haystack for needle in needles)

    return predicate


def _has_video(haystack: str, hints: PageHints) -> bool:
    return hints.has_video or "video" in haystack


def _has_images(haystack: str, hints: PageHints) -> bool:
    return hints.image_count > 5 or "image" in haystack


# Evaluated top to bottom; the first matching rule decides the label.
CONTENT_TYPE_RULES: list[tuple[Callable[[str, PageHints], bool], str]] = [
    (_mentions("news", "article"), "news"),
    (_mentions("tutorial", "guide", "how to"), "tutorial"),
    (_mentions("documentation", "api", "reference"), "documentation"),
    (_mentions("blog", "post"), "blog"),
    (_has_video, "video"),
    (_has_images, "image"),
    (_mentions("product", "buy", "price"), "product"),
    (_mentions("resume", "cv"), "resume"),
    (_mentions("job", "career", "employment"), "job"),
]


def calculate_read_time(word_count: int) -> int:
    """Minutes at 200 wpm, rounded up and clamped to [1, 30]."""
    minutes = math.ceil(max(word_count, 0) / WORDS_PER_MINUTE)
    return max(MIN_READ_TIME, min(minutes, MAX_READ_TIME))


def calculate_complexity(text: str | None) -> float:
    """
    Readability proxy in [0, 1] from average word length (saturating at 8 chars)
    and average sentence length (saturating at 25 words), weighted equally.
    """
    if not text:
        return DEFAULT_COMPLEXITY

    words = text.split()
    sentences = split_sentences(text)
    if not words or not sentences:
        return DEFAULT_COMPLEXITY

    avg_word_length = sum(len(word) for word in words) / len(words)
    avg_sentence_length = len(words) / len(sentences)

    word_complexity = min(avg_word_length / 8, 1.0)
    sentence_complexity = min(avg_sentence_length / 25, 1.0)
    return min((word_complexity + sentence_complexity) / 2, 1.0)


def determine_content_type(text: str, title: str, hints: PageHints | None = None) -> str:
    haystack = f"{text or ''} {title or ''}".lower()
    hints = hints or PageHints()
    for predicate, label in CONTENT_TYPE_RULES:
        if predicate(haystack, hints):
            return label
    return "general"


def analyze_sentiment(text: str | None) -> str:
    if not text:
        return "neutral"

    positive = negative = 0
    for word in text.lower().split():
        if word in POSITIVE_WORDS:
            positive += 1
        if word in NEGATIVE_WORDS:
            negative += 1

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"
