from __future__ import annotations

from bs4 import BeautifulSoup


def first_image_src(html: str) -> str | None:
    """
    Return the src of the first <img> element in an HTML fragment.

    The fragment is parsed rather than pattern-matched, so attribute order and
    quoting do not matter and src attributes on other tags are ignored.
    """
    if not html or "<img" not in html.lower():
        return None

    soup = BeautifulSoup(html, "html.parser")
    for img in soup.find_all("img"):
        src = img.get("src")
        if isinstance(src, str) and src.strip():
            return src.strip()

    return None


def resolve_image(
    front_matter_image: str | None,
    html: str,
    *,
    scan_body: bool = True,
) -> str | None:
    if front_matter_image:
        return front_matter_image
    if not scan_body:
        return None
    return first_image_src(html)
