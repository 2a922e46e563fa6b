# site_mapper/crawler/link_extractor.py
"""
Link extraction from HTML documents.
"""
from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from site_mapper.crawler.errors import ParseError
from site_mapper.utils import parse_href


def extract_links(markup: Union[str, bytes]) -> List[str]:
    """
    Return the ``href`` of every ``<a>`` element, trimmed, in document order.

    Anchors whose href is missing, empty or unparsable are skipped. Links are
    returned exactly as written; resolving and scoping happen in the frontier.
    Raises :class:`ParseError` if the parser rejects the markup outright.
    """
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"unable to parse HTML: {exc}") from exc

    links: List[str] = []
    for tag in soup.find_all("a"):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        href = parse_href(href_val)
        if href is not None:
            links.append(href)
    return links
