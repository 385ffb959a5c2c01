"""
Corpus sources: turn texts into immutable Documents and an ordered
(document_id, line_index, raw_text) record stream.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, NamedTuple, Tuple, Union

from tidymining.etl.normalizers import normalize_newlines, remove_footnotes, strip_gutenberg_headers
from tidymining.etl.readers import SUPPORTED_SUFFIXES, read_text_smart
from tidymining.shared.errors import MalformedConfigurationError, MissingReferenceDataError
from tidymining.shared.io_utils import parse_book_filename
from tidymining.shared.resources import ensure_nltk_resource

logger = logging.getLogger(__name__)

# NLTK's Gutenberg selection ships three of the six Austen novels
AUSTEN_FILEIDS = {
    "Sense & Sensibility": "austen-sense.txt",
    "Emma": "austen-emma.txt",
    "Persuasion": "austen-persuasion.txt",
}


class Document(NamedTuple):
    document_id: str
    lines: Tuple[str, ...]


def make_document(document_id: str, text: Union[str, Iterable[str]]) -> Document:
    """
    Build a Document from a text blob (split on newlines) or a sequence of lines.
    A final newline terminates the last line; it does not open an empty one.
    """
    if isinstance(text, str):
        lines = normalize_newlines(text).split("\n")
        if lines[-1] == "":
            lines.pop()
        lines = tuple(lines)
    else:
        lines = tuple(text)
    return Document(str(document_id), lines)


def _check_unique(documents: List[Document]) -> List[Document]:
    seen = set()
    for doc in documents:
        if doc.document_id in seen:
            raise MalformedConfigurationError(
                "Duplicate document id in corpus", stage="corpus", document_id=doc.document_id
            )
        seen.add(doc.document_id)
    return documents


def documents_from_mapping(texts: Dict[str, Union[str, Iterable[str]]]) -> List[Document]:
    """In-memory corpus: {document_id: text or lines}, insertion order kept."""
    return _check_unique([make_document(doc_id, text) for doc_id, text in texts.items()])


def iter_records(documents: Iterable[Document]) -> Iterator[Tuple[str, int, str]]:
    """Yield (document_id, line_index, raw_text) in corpus order; line_index is 0-based."""
    for doc in documents:
        for idx, line in enumerate(doc.lines):
            yield doc.document_id, idx, line


def austen_books(download=None) -> List[Document]:
    """
    Jane Austen's novels from NLTK's bundled Gutenberg selection.

    Raises:
        MissingReferenceDataError: the NLTK gutenberg corpus is unavailable.
    """
    ensure_nltk_resource("gutenberg", stage="corpus", download=download)
    from nltk.corpus import gutenberg

    docs = []
    for title, fileid in AUSTEN_FILEIDS.items():
        try:
            raw = gutenberg.raw(fileid)
        except (LookupError, OSError) as e:
            raise MissingReferenceDataError(f"Cannot read {fileid}: {e}", stage="corpus", document_id=title) from e
        docs.append(make_document(title, raw))
        logger.debug("Loaded %s (%d lines)", title, len(docs[-1].lines))
    return docs


def _expand_paths(paths: Iterable[Union[str, Path]]) -> List[Path]:
    out = []
    for ip in map(Path, paths):
        if ip.is_dir():
            found = sorted(p for p in ip.rglob("*") if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES)
            if not found:
                raise MissingReferenceDataError(f"No supported files found under {ip}", stage="corpus")
            out.extend(found)
        else:
            out.append(ip)
    return out


def load_text_files(paths: Iterable[Union[str, Path]], *, strip_gut=True, keep_footnotes=True) -> List[Document]:
    """
    Load local files (or directories of them) as Documents.

    Steps per file:
      1) Read raw text (.txt/.md/.rst/.docx).
      2) Optionally strip Project Gutenberg boilerplate.
      3) Optionally remove footnotes.
    Document ids are file stems, or the title for Title__Author__pgID files;
    line breaks are kept as they are.
    """
    docs = []
    for p in _expand_paths(paths):
        raw = read_text_smart(p)
        text = strip_gutenberg_headers(raw) if strip_gut else normalize_newlines(raw)
        if not keep_footnotes:
            text = remove_footnotes(text)
        title, _, pgid = parse_book_filename(p.name)
        docs.append(make_document(title if pgid is not None else p.stem, text))
        logger.info("Loaded %s (%d lines)", p.name, len(docs[-1].lines))
    return _check_unique(docs)
