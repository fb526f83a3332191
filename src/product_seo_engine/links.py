"""
Link and heading analysis for long descriptions.

Internal links point at the store's category pages
(``{store_url}/product-category/{slug}``). External follow links point
off-site, open in a new tab and carry no ``nofollow`` rel token.
"""

from urllib.parse import urlparse

from bs4 import BeautifulSoup

CATEGORY_PATH = "/product-category/"


def _soup(html_text: str) -> BeautifulSoup:
    return BeautifulSoup(html_text or "", "html.parser")


def _host(url: str) -> str:
    host = urlparse(url).netloc.lower()
    return host[4:] if host.startswith("www.") else host


def _rel_tokens(anchor) -> set[str]:
    rel = anchor.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return {token.lower() for token in rel}


def is_internal_category_link(href: str, store_url: str = "") -> bool:
    """Check whether href targets a category page of this store."""
    if not href or CATEGORY_PATH not in href:
        return False
    if href.startswith("/"):
        return True
    store_host = _host(store_url) if store_url else ""
    # Without a store URL any absolute category link is accepted
    return not store_host or _host(href) == store_host


def count_internal_category_links(html_text: str, store_url: str = "") -> int:
    """
    Count links to the store's category pages.

    Args:
        html_text: Long description HTML.
        store_url: Store base URL.

    Returns:
        Number of qualifying anchors.
    """
    return sum(
        1
        for anchor in _soup(html_text).find_all("a", href=True)
        if is_internal_category_link(anchor["href"], store_url)
    )


def count_external_follow_links(html_text: str, store_url: str = "") -> int:
    """
    Count external links that search engines will follow.

    A qualifying anchor has an absolute http(s) href on another host,
    target="_blank", and no "nofollow" in its rel attribute.

    Args:
        html_text: Long description HTML.
        store_url: Store base URL; links to its host are not external.

    Returns:
        Number of qualifying anchors.
    """
    store_host = _host(store_url) if store_url else ""
    count = 0
    for anchor in _soup(html_text).find_all("a", href=True):
        href = anchor["href"].strip()
        if not href.lower().startswith(("http://", "https://")):
            continue
        if store_host and _host(href) == store_host:
            continue
        if (anchor.get("target") or "").lower() != "_blank":
            continue
        if "nofollow" in _rel_tokens(anchor):
            continue
        count += 1
    return count


def has_h1(html_text: str) -> bool:
    """Check whether the HTML already contains an <h1>."""
    return _soup(html_text).find("h1") is not None
