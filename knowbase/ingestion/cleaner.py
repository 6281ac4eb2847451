"""Text cleaning for fetched HTML pages."""

import re

from bs4 import BeautifulSoup

# Tried in order to find the main content of a page.
CONTENT_SELECTORS = ["main", "article", "div#content", "div#article", "div#main"]


def looks_like_html(text: str, content_type: str = "") -> bool:
    """Decide whether a fetched body should be reduced to text."""
    if "html" in content_type.lower():
        return True
    head = text.lstrip()[:512].lower()
    return head.startswith("<!doctype html") or "<html" in head


def clean_html_text(html: str) -> str:
    """Extract readable text from an HTML page.

    Prefers a main-content container, drops scripts and page chrome, flattens
    tables into pipe-separated rows, and normalizes whitespace while keeping
    paragraph breaks.
    """
    soup = BeautifulSoup(html, "html.parser")

    container = None
    for selector in CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container:
            break
    if container is None:
        container = soup.body or soup

    for tag in container.find_all(["script", "style", "noscript", "nav", "footer", "header", "aside"]):
        tag.decompose()

    for table in container.find_all("table"):
        table_text = table.get_text(separator=" | ", strip=True)
        if table_text:
            table.replace_with(f"\n[Table: {table_text}]\n")
        else:
            table.decompose()

    text = container.get_text(separator="\n", strip=False)
    return _normalize_whitespace(text).strip()


def _normalize_whitespace(text: str) -> str:
    """Normalize whitespace while preserving paragraph breaks."""
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n +", "\n", text)
    text = re.sub(r" +\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text
