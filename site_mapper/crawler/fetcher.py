# site_mapper/crawler/fetcher.py
"""
Fetcher module: issues one GET per URL and classifies the response.
"""
from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession

from site_mapper.crawler.errors import HTTPStatusError, ParseError, TransportError
from site_mapper.crawler.link_extractor import extract_links
from site_mapper.crawler.models import Page
from site_mapper.logger import get_logger

HTML_CONTENT_TYPES: Sequence[str] = ("text/html", "application/xhtml+xml")


def is_html_content(content_type: str) -> bool:
    ctype = content_type.lower()
    return any(html in ctype for html in HTML_CONTENT_TYPES)


class Fetcher:
    """Fetches a single URL and turns the outcome into a :class:`Page`.

    No retries: one failed attempt is final for that URL.
    """

    def __init__(self, session: ClientSession, max_concurrency: Optional[int] = None) -> None:
        self.session = session
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
        self.logger = get_logger("fetcher")

    async def fetch(self, url: str) -> Page | None:
        """
        GET *url* and return its Page.

        Returns None (skip) for a 2xx response that is not HTML. Transport
        failures, non-2xx statuses and parse failures come back as a Page
        carrying ``error``.
        """
        async with AsyncExitStack() as stack:
            if self._semaphore is not None:
                await stack.enter_async_context(self._semaphore)
            try:
                async with self.session.get(url, raise_for_status=False) as resp:
                    if not 200 <= resp.status < 300:
                        err = HTTPStatusError(url, resp.status, resp.reason)
                        self.logger.warning("%s", err)
                        return Page(location=url, error=err)

                    ctype = resp.headers.get("Content-Type", "")
                    if not is_html_content(ctype):
                        self.logger.debug("Skipping non-HTML %s (%s)", url, ctype or "no content type")
                        return None

                    body = await resp.read()
            except (ClientError, asyncio.TimeoutError) as exc:
                err = TransportError(f"GET {url} failed: {exc!r}")
                err.__cause__ = exc
                self.logger.warning("%s", err)
                return Page(location=url, error=err)

        try:
            links = extract_links(body)
        except ParseError as err:
            self.logger.warning("Failed to parse %s: %s", url, err)
            return Page(location=url, error=err)
        return Page(location=url, links=tuple(links))
