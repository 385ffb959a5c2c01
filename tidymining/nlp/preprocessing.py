# usage: tokenization into tidy one-word-per-row tables and stop-word removal (NLTK)
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple

import pandas as pd
from nltk.tokenize import RegexpTokenizer

from tidymining import config
from tidymining.nlp.annotate import AnnotatedLine
from tidymining.nlp.features import make_ngrams
from tidymining.shared.errors import MalformedConfigurationError, MissingReferenceDataError
from tidymining.shared.resources import ensure_nltk_resource

logger = logging.getLogger(__name__)

TOKEN_COLUMNS = ["document", "line_number", "chapter", "word"]

_WORDS = RegexpTokenizer(config.WORD_PATTERN)


class Token(NamedTuple):
    document: str
    line_number: int
    chapter: int
    word: str


def words(text: str) -> List[str]:
    """Lowercased word tokens of one string; punctuation and empty strings dropped."""
    return [w for w in (t.lower() for t in _WORDS.tokenize(text)) if w]


def _as_lines(lines) -> Iterable[AnnotatedLine]:
    if isinstance(lines, pd.DataFrame):
        return (AnnotatedLine(*row) for row in lines[["document", "line_number", "chapter", "text"]].itertuples(index=False))
    return lines


def iter_tokens(lines) -> Iterator[Token]:
    """Lazily yield one Token per word, keeping document/line/chapter and emission order."""
    for ln in _as_lines(lines):
        for w in words(ln.text):
            yield Token(ln.document, ln.line_number, ln.chapter, w)


def unnest_tokens(lines) -> pd.DataFrame:
    """Tidy token table (document, line_number, chapter, word) from annotated lines."""
    return pd.DataFrame(list(iter_tokens(lines)), columns=TOKEN_COLUMNS).astype(
        {"line_number": "int64", "chapter": "int64"}
    )


def unnest_ngrams(lines, n: int = 2) -> pd.DataFrame:
    """
    Tidy n-gram table: consecutive words of one line joined by a space.
    N-grams never cross a line boundary; lines shorter than n contribute nothing.
    """
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise MalformedConfigurationError(f"n-gram size must be a positive integer, got {n!r}", stage="tokenize")
    rows = []
    for ln in _as_lines(lines):
        for gram in make_ngrams(words(ln.text), n, sep=" "):
            rows.append(Token(ln.document, ln.line_number, ln.chapter, gram))
    return pd.DataFrame(rows, columns=TOKEN_COLUMNS).astype({"line_number": "int64", "chapter": "int64"})


def load_stop_words(source="nltk", language: str = config.STOPWORD_LANGUAGE, extra: Iterable[str] = (), download=None) -> frozenset:
    """
    Load a stop-word set, lowercased.

    Args:
        source: "nltk" for NLTK's stop-word corpus, otherwise a path to a
                file with one word per line ('#' starts a comment).
        language: NLTK stop-word language.
        extra: additional words to exclude.

    Raises:
        MissingReferenceDataError: the list cannot be loaded.
    """
    if str(source) == "nltk":
        ensure_nltk_resource("stopwords", stage="stopwords", download=download)
        from nltk.corpus import stopwords

        try:
            base = stopwords.words(language)
        except (LookupError, OSError) as e:
            raise MissingReferenceDataError(f"No NLTK stop words for language {language!r}", stage="stopwords") from e
    else:
        p = Path(source)
        try:
            raw = p.read_text(encoding="utf-8")
        except OSError as e:
            raise MissingReferenceDataError(f"Cannot read stop-word file {p}: {e}", stage="stopwords") from e
        base = [ln.split("#", 1)[0].strip() for ln in raw.splitlines()]

    stop = frozenset(w.lower() for w in list(base) + list(extra) if w and w.strip())
    logger.debug("Loaded %d stop words from %s", len(stop), source)
    return stop


def remove_stop_words(tokens, stop_words) -> pd.DataFrame:
    """Anti-join: keep tokens whose word is not a stop word. Input is not modified."""
    if not isinstance(stop_words, (set, frozenset)):
        stop_words = frozenset(stop_words)
    if isinstance(tokens, pd.DataFrame):
        return tokens.loc[~tokens["word"].isin(stop_words)].reset_index(drop=True)
    return pd.DataFrame([t for t in tokens if t.word not in stop_words], columns=TOKEN_COLUMNS)
