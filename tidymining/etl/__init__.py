"""
Package export surface for corpus loading helpers.
Exposes readers, normalizers, corpus sources and the Gutenberg downloader.
"""
from .readers import read_text_smart          # loader for txt/md/rst/docx
from .normalizers import (                     # text normalization utilities
    strip_gutenberg_headers,
    remove_footnotes,
    normalize_newlines,
)
from .corpus import (                          # Documents and the record stream
    Document,
    make_document,
    documents_from_mapping,
    iter_records,
    austen_books,
    load_text_files,
)
from .gutenberg import download_gutenberg      # Gutendex-backed downloader

__all__ = [
    "read_text_smart",
    "strip_gutenberg_headers",
    "remove_footnotes",
    "normalize_newlines",
    "Document",
    "make_document",
    "documents_from_mapping",
    "iter_records",
    "austen_books",
    "load_text_files",
    "download_gutenberg",
]

# Package version identifier
__version__ = "0.1.0"
