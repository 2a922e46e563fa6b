import asyncio

import pytest
import pytest_asyncio
from aiohttp import ClientSession, ClientTimeout, web

from site_mapper.crawler.errors import HTTPStatusError, ParseError, TransportError
from site_mapper.crawler.fetcher import Fetcher, is_html_content


@pytest_asyncio.fixture
async def session():
    async with ClientSession(timeout=ClientTimeout(total=0.5)) as s:
        yield s


@pytest.mark.parametrize(
    "content_type,expected",
    [
        ("text/html", True),
        ("text/html; charset=utf-8", True),
        ("TEXT/HTML", True),
        ("application/xhtml+xml", True),
        ("application/json", False),
        ("text/plain", False),
        ("", False),
    ],
)
def test_is_html_content(content_type, expected):
    assert is_html_content(content_type) is expected


@pytest.mark.asyncio()
async def test_fetch_outcomes(site, session):
    async def xhtml(_):
        return web.Response(text='<html><body><a href="/x">x</a></body></html>',
                            content_type="application/xhtml+xml")

    async def plain(_):
        return web.Response(text="just text", content_type="text/plain")

    async def teapot(_):
        return web.Response(status=418)

    async def slow(_):
        await asyncio.sleep(1)
        return web.Response(text="<a href='/late'>late</a>", content_type="text/html")

    base = await site.serve({
        "/": '<a href="/a">a</a> <a href=" /b ">b</a>',
        "/xhtml": xhtml,
        "/plain": plain,
        "/teapot": teapot,
        "/slow": slow,
    })
    fetcher = Fetcher(session)

    page = await fetcher.fetch(f"{base}/")
    assert page is not None and page.ok
    assert page.links == ("/a", "/b")

    page = await fetcher.fetch(f"{base}/xhtml")
    assert page is not None and page.links == ("/x",)

    assert await fetcher.fetch(f"{base}/plain") is None

    page = await fetcher.fetch(f"{base}/teapot")
    assert isinstance(page.error, HTTPStatusError)
    assert page.error.status == 418
    assert page.links == ()

    page = await fetcher.fetch(f"{base}/slow")
    assert page.location == f"{base}/slow"
    assert isinstance(page.error, TransportError)

    assert site.hits["/teapot"] == 1


@pytest.mark.asyncio()
async def test_connection_refused_is_transport_error(session, unused_tcp_port):
    url = f"http://127.0.0.1:{unused_tcp_port}/"
    page = await Fetcher(session).fetch(url)
    assert page.location == url
    assert isinstance(page.error, TransportError)
    assert page.error.__cause__ is not None


@pytest.mark.asyncio()
async def test_parse_failure_is_reported_on_page(site, session, monkeypatch):
    import site_mapper.crawler.fetcher as module

    def reject(markup):
        raise ParseError("unable to parse HTML: bad markup")

    monkeypatch.setattr(module, "extract_links", reject)
    base = await site.serve({"/": '<a href="/a">a</a>'})
    url = f"{base}/"

    page = await Fetcher(session).fetch(url)

    assert page.location == url
    assert isinstance(page.error, ParseError)
    assert page.links == ()
    assert site.hits["/"] == 1
