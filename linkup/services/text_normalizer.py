import re

from bs4 import BeautifulSoup

MAX_TEXT_LENGTH = 5000

NOISE_SELECTORS = [
    "script", "style", "nav", "header", "footer",
    ".nav", ".header", ".footer", ".sidebar", ".menu", ".ad", ".advertisement",
]

_WHITESPACE_RE = re.compile(r"\s+")


def strip_noise(soup: BeautifulSoup) -> None:
    """Remove script, style and page-chrome regions from the parsed document in place."""
    for selector in NOISE_SELECTORS:
        for element in soup.select(selector):
            element.decompose()


def clean_text(text: str | None, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Collapse all whitespace runs to single spaces, trim, and cap the length."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()[:max_length]
