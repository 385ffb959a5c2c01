"""
Project Gutenberg downloader backed by the Gutendex catalogue API.

- Robust networking: retries, backoff, longer timeouts, host fallback
- Picks a plain-text (preferably UTF-8) format for each book
- Strips Project Gutenberg headers/footers from saved text
- Filenames follow Title__Author__pg<ID>.txt
"""
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from tidymining import config
from tidymining.etl.normalizers import strip_gutenberg_headers
from tidymining.shared.io_utils import book_path

logger = logging.getLogger(__name__)


def make_session() -> requests.Session:
    s = requests.Session()
    retry = Retry(
        total=7, connect=5, read=5,
        backoff_factor=0.6,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=frozenset(["GET"]),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=20, pool_maxsize=20)
    s.mount("https://", adapter)
    s.headers.update({"User-Agent": config.USER_AGENT})
    return s


def pick_text_format(formats: Dict[str, str]) -> Optional[str]:
    """Choose a plain-text download URL, skipping archives; prefer charset=utf-8."""
    candidates = []
    for k, v in formats.items():
        if not k.startswith("text/plain"):
            continue
        if v.endswith(".zip") or v.endswith(".gz"):
            continue
        candidates.append((k.lower(), v))
    if not candidates:
        return None
    for k, v in candidates:
        if "charset=utf-8" in k:
            return v
    return candidates[0][1]


def fetch_book_meta(session: requests.Session, pgid: int, bases: Optional[List[str]] = None) -> dict:
    """
    Fetch the catalogue record of one book, trying each Gutendex host in turn.

    Raises:
        RuntimeError: every host failed; the message lists each failure.
    """
    errs = []
    for base in bases or config.GUTENDEX_BASES:
        url = f"{base}/books/{pgid}"
        try:
            r = session.get(url, timeout=config.DEFAULT_TIMEOUT, allow_redirects=True)
            data = r.json()
        except (requests.RequestException, json.JSONDecodeError, ValueError) as e:
            errs.append(f"{type(e).__name__} on {url}: {e}")
            continue
        if isinstance(data, dict) and data.get("detail"):
            errs.append(f"API detail for {url}: {data.get('detail')}")
            continue
        return data
    raise RuntimeError("All Gutendex bases failed:\n  - " + "\n  - ".join(errs))


def save_book(session: requests.Session, book: dict, dest: Path) -> Tuple[str, Optional[Path]]:
    """Download one catalogue record's text into `dest`; returns (status, path)."""
    title = book.get("title") or f"pg{book.get('id')}"
    authors = ", ".join(a.get("name", "") for a in book.get("authors", [])) or "Unknown"
    url = pick_text_format(book.get("formats", {}))
    if not url:
        return "no-plain-text", None

    path = book_path(dest, title, authors, int(book["id"]))
    if path.exists():
        return "exists", path

    r = session.get(url, timeout=config.DEFAULT_TIMEOUT)
    r.raise_for_status()
    dest.mkdir(parents=True, exist_ok=True)
    path.write_text(strip_gutenberg_headers(r.text), encoding="utf-8", errors="ignore")
    return "saved", path


def download_gutenberg(ids: Iterable[int], dest, session: Optional[requests.Session] = None) -> List[Path]:
    """Download books by Gutenberg id; returns the paths of saved (or already present) texts."""
    dest = Path(dest)
    session = session or make_session()
    saved = []
    for pgid in ids:
        book = fetch_book_meta(session, int(pgid))
        status, path = save_book(session, book, dest)
        if path is None:
            logger.warning("pg%s has no plain-text format; skipped", pgid)
            continue
        logger.info("pg%s %s -> %s", pgid, status, path.name)
        saved.append(path)
    return saved
