# usage: helper functions for filenames of saved books and reports
from pathlib import Path
import hashlib
import re


def safe_filename(name: str, maxlen: int = 180) -> str:
    """
    Sanitize a string for use as a filename.

    Steps:
    - Replace invalid characters (anything not alphanumeric, underscore, dash, dot, or space) with "_".
    - Replace whitespace with "_".
    - Collapse multiple underscores.
    - Strip trailing/leading dots, spaces, or underscores.
    - Truncate result to `maxlen` (default 180 chars).
    - If nothing remains, return "untitled".
    """
    s = re.sub(r"[^\w\-. ]+", "_", name)  # keep only safe chars
    s = re.sub(r"\s+", "_", s)  # collapse whitespace
    s = re.sub(r"_+", "_", s).strip(" ._")  # collapse underscores, trim
    return s[:maxlen] if s else "untitled"


def book_path(dest: Path, title: str, authors: str, pgid: int, max_total: int = 240) -> Path:
    """
    Path for a downloaded book: `Title__Author__pg<ID>.txt` inside `dest`.

    Over-long names are truncated and suffixed with a short SHA-1 of
    title/author/id so two books never collide.
    """
    base = f"{safe_filename(title)}__{safe_filename(authors)}__pg{pgid}"
    full = dest / f"{base}.txt"
    if len(str(full)) <= max_total:
        return full
    h = hashlib.sha1(f"{title}|{authors}|{pgid}".encode("utf-8")).hexdigest()[:8]
    allow = max_total - len(str(dest)) - len("/__") - len(h) - len(".txt")
    return dest / f"{base[:max(16, allow)]}__{h}.txt"


def parse_book_filename(name: str):
    """Parse Title__Author__pgID from a filename stem (missing parts come back empty)."""
    stem = Path(name).stem
    parts = stem.split("__")
    title = parts[0].replace("_", " ").strip() if parts else stem.replace("_", " ").strip()
    author = parts[1].replace("_", " ").strip() if len(parts) > 1 else ""
    pgid = None
    if len(parts) > 2:
        m = re.search(r"pg(\d+)", parts[2], re.IGNORECASE)
        if m:
            pgid = int(m.group(1))
    return title, author, pgid
