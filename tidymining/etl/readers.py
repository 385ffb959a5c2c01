# usage: text reader for .txt/.md/.rst/.docx corpus files
from pathlib import Path

import docx2txt

from tidymining.shared.errors import MissingReferenceDataError

TEXT_SUFFIXES = (".txt", ".md", ".rst")
SUPPORTED_SUFFIXES = TEXT_SUFFIXES + (".docx",)


def _read_txt(p: Path) -> str:
    """Try common encodings; fall back to 'ignore' decoding to salvage bytes."""
    for enc in ("utf-8", "utf-8-sig", "cp1252", "latin-1"):
        try:
            return p.read_text(encoding=enc)
        except UnicodeDecodeError:
            continue
    return p.read_bytes().decode("utf-8", "ignore")


def _read_docx(p: Path) -> str:
    """Extract paragraph text from a .docx; one paragraph per line."""
    return docx2txt.process(str(p)) or ""


def read_text_smart(path) -> str:
    """
    Read text from a corpus file:
      - .txt/.md/.rst → open with encoding fallbacks
      - .docx → docx2txt
      - else  → treat as plain text

    Raises:
        MissingReferenceDataError: when the file does not exist.
    """
    p = Path(path)
    if not p.is_file():
        raise MissingReferenceDataError(f"Corpus file not found: {p}", stage="corpus")

    if p.suffix.lower() == ".docx":
        return _read_docx(p)
    return _read_txt(p)
