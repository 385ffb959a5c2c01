# usage: line numbers and running chapter counter per document
import re
from typing import Iterable, Iterator, NamedTuple

import pandas as pd

from tidymining import config
from tidymining.shared.errors import MalformedConfigurationError

LINE_COLUMNS = ["document", "line_number", "chapter", "text"]


class AnnotatedLine(NamedTuple):
    document: str
    line_number: int
    chapter: int
    text: str


def compile_chapter_pattern(pattern=None):
    """Compile a chapter-heading regex case-insensitively; already compiled patterns pass through."""
    if pattern is None:
        pattern = config.CHAPTER_PATTERN
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise MalformedConfigurationError(f"Invalid chapter pattern {pattern!r}: {e}", stage="annotate") from e


def iter_annotated_lines(document, chapter_pattern=None) -> Iterator[AnnotatedLine]:
    """
    Number the lines of one document and track its chapter.

    The chapter counter starts at 0 and is bumped before a heading line is
    emitted, so the heading belongs to the chapter it opens.
    """
    heading = compile_chapter_pattern(chapter_pattern)
    chapter = 0
    for line_number, text in enumerate(document.lines, start=1):
        if heading.search(text):
            chapter += 1
        yield AnnotatedLine(document.document_id, line_number, chapter, text)


def annotate_lines(documents: Iterable, chapter_pattern=None) -> pd.DataFrame:
    """Tidy table of annotated lines for a whole corpus, in corpus order."""
    heading = compile_chapter_pattern(chapter_pattern)
    rows = [ln for doc in documents for ln in iter_annotated_lines(doc, heading)]
    return pd.DataFrame(rows, columns=LINE_COLUMNS).astype({"line_number": "int64", "chapter": "int64"})
