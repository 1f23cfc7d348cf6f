import asyncio
import logging

import httpx
from bs4 import BeautifulSoup, Tag

from linkup.config import settings
from linkup.models.analysis import ExtractedContent, Heading
from linkup.services.lexical import count_words
from linkup.services.text_normalizer import clean_text, strip_noise

logger = logging.getLogger(__name__)

MAIN_CONTENT_SELECTORS = [
    "main",
    "article",
    ".content",
    ".post",
    ".entry",
    "#content",
    "#main",
    ".main-content",
    ".post-content",
    ".article-content",
]
MAX_HEADINGS = 5
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def _select_main_region(soup: BeautifulSoup) -> Tag:
    for selector in MAIN_CONTENT_SELECTORS:
        for element in soup.select(selector):
            if element.get_text(strip=True):
                return element
    return soup.body or soup


def _extract_headings(region: Tag) -> list[Heading]:
    return [
        Heading(level=int(tag.name[1]), text=clean_text(tag.get_text(" ")))
        for tag in region.find_all(HEADING_TAGS, limit=MAX_HEADINGS)
    ]


def extract_content(html: str) -> ExtractedContent:
    """
    Parse an HTML document into ExtractedContent.

    Metadata is read before noise removal. The main text comes from the first
    selector in MAIN_CONTENT_SELECTORS with a non-empty match, else the whole body.
    """
    soup = BeautifulSoup(html or "", "lxml")

    title = soup.title.get_text(strip=True) if soup.title else ""
    title = title or _meta_content(soup, property="og:title")
    description = _meta_content(soup, name="description") or _meta_content(
        soup, property="og:description"
    )
    image = _meta_content(soup, property="og:image")

    strip_noise(soup)
    region = _select_main_region(soup)
    text = clean_text(region.get_text(" "))

    return ExtractedContent(
        title=title,
        description=description,
        hero_image_url=image,
        main_text=text,
        headings=_extract_headings(region),
        word_count=count_words(text),
        has_video=soup.find("video") is not None,
        image_count=len(soup.find_all("img")),
    )


class ContentFetcher:
    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        max_bytes: int | None = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECONDS
        self._user_agent = user_agent or settings.USER_AGENT
        self._max_bytes = max_bytes if max_bytes is not None else settings.FETCH_MAX_BYTES

    async def _read_capped(self, response: httpx.Response, url: str) -> bytes:
        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
            size += len(chunk)
            if size >= self._max_bytes:
                logger.info("[fetch] body truncated | url=%s | max_bytes=%d", url, self._max_bytes)
                break
        return b"".join(chunks)[: self._max_bytes]

    async def fetch(self, url: str) -> ExtractedContent:
        """
        Download url and extract its content. Never raises for network trouble:
        timeouts, transport errors and non-2xx responses come back as an empty
        ExtractedContent with fetch_error set.

        At most max_bytes of the body are read, and parsing runs in a worker
        thread so the event loop stays responsive.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", url) as response:
                    if not 200 <= response.status_code < 300:
                        logger.warning("[fetch] bad status | url=%s | status=%s", url, response.status_code)
                        return ExtractedContent(fetch_error=f"HTTP {response.status_code}")
                    body = await self._read_capped(response, url)
                    encoding = response.charset_encoding or "utf-8"
        except httpx.TimeoutException:
            logger.warning("[fetch] timed out | url=%s | timeout=%ss", url, self._timeout)
            return ExtractedContent(fetch_error="timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("[fetch] request failed | url=%s | error=%s", url, exc)
            return ExtractedContent(fetch_error=str(exc) or type(exc).__name__)

        html = body.decode(encoding, errors="replace")
        content = await asyncio.to_thread(extract_content, html)
        logger.info("[fetch] extracted | url=%s | words=%d", url, content.word_count)
        return content
