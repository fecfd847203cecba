"""Link header parsing for GitHub's REST pagination.

Format: <https://api.github.com/...?page=2>; rel="next", <...?page=5>; rel="last"
"""

import re

_SEPARATOR = re.compile(r",\s*(?=<)")
_LINK_PART = re.compile(r'\s*<([^>]+)>\s*;\s*(.*)')
_REL = re.compile(r'rel\s*=\s*"?([^";]+)"?')


def parse_link_header(link_header: str | None) -> dict[str, str]:
    """Map each rel (next, prev, first, last) to its URL."""
    links: dict[str, str] = {}
    if not link_header:
        return links
    for part in _SEPARATOR.split(link_header):
        match = _LINK_PART.match(part)
        if not match:
            continue
        url, params = match.groups()
        rel = _REL.search(params)
        if rel:
            for name in rel.group(1).split():
                links.setdefault(name, url)
    return links


def next_link(link_header: str | None) -> str | None:
    return parse_link_header(link_header).get("next")


def is_within_root(url: str, api_root: str) -> bool:
    """True when ``url`` points under ``api_root`` (no host or scheme switch)."""
    return url == api_root or url.startswith(api_root.rstrip("/") + "/")
