"""Fetch a live page so it can be audited like a local file."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import requests

from guides.config import DATA_DIR

USER_AGENT = "Mozilla/5.0 (compatible; a11y-guides-checker)"


def default_filename(url: str) -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    domain = url.replace("https://", "").replace("http://", "").split("/")[0] or "page"
    return f"{domain}_{timestamp}.html"


def download_html(url: str, filename: str | Path | None = None, *, timeout: int = 30, verbose: bool = False) -> Path:
    """Save the page at *url* and return the file path; HTTP errors raise requests.HTTPError."""
    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    response.raise_for_status()

    path = Path(filename) if filename else DATA_DIR / "pages" / default_filename(url)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(response.text)

    if verbose:
        print(f"HTML saved to {path}")
    return path
