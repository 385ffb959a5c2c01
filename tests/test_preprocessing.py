from pathlib import Path

import nltk
import pytest

from tidymining.etl.corpus import make_document
from tidymining.nlp.annotate import annotate_lines
from tidymining.nlp.preprocessing import (
    iter_tokens,
    load_stop_words,
    remove_stop_words,
    unnest_ngrams,
    unnest_tokens,
    words,
)
from tidymining.shared.errors import MalformedConfigurationError, MissingReferenceDataError


def test_words_lowercase_and_drop_punctuation() -> None:
    assert words("Hello, World! Don't _stop_ -- it's 42.") == ["hello", "world", "don't", "stop", "it's", "42"]


def test_words_handle_accents_and_blank_text() -> None:
    assert words("Café NAÏVE") == ["café", "naïve"]
    assert words("  ... !!") == []


def test_tokens_keep_line_and_chapter(novel_documents) -> None:
    tokens = unnest_tokens(annotate_lines(novel_documents))

    first = tokens.iloc[0]
    assert (first["document"], first["line_number"], first["chapter"], first["word"]) == ("Northanger", 1, 0, "preface")
    plays = tokens.loc[tokens["word"] == "boy's"].iloc[0]
    assert (plays["line_number"], plays["chapter"]) == (6, 2)
    assert list(tokens.columns) == ["document", "line_number", "chapter", "word"]


def test_tokenization_is_deterministic(novel_documents) -> None:
    lines = annotate_lines(novel_documents)

    assert list(iter_tokens(lines)) == list(iter_tokens(lines))
    assert unnest_tokens(lines).equals(unnest_tokens(lines))


def test_iter_tokens_is_lazy() -> None:
    doc = make_document("d", ["one two", "three"])
    lines = annotate_lines([doc])

    gen = iter_tokens(lines)
    assert next(gen).word == "one"
    assert [t.word for t in gen] == ["two", "three"]


def test_ngrams_stay_within_a_line() -> None:
    lines = annotate_lines([make_document("d", ["the quick fox", "jumps", "over the dog"])])

    grams = unnest_ngrams(lines, 2)

    assert grams["word"].tolist() == ["the quick", "quick fox", "over the", "the dog"]
    assert grams["line_number"].tolist() == [1, 1, 3, 3]
    with pytest.raises(MalformedConfigurationError):
        unnest_ngrams(lines, 0)


def test_stop_word_filter_is_an_idempotent_anti_join(make_tokens, stop_words) -> None:
    tokens = make_tokens(["the", "fox", "of", "the", "dog"])

    once = remove_stop_words(tokens, stop_words)
    twice = remove_stop_words(once, stop_words)

    assert once["word"].tolist() == ["fox", "dog"]
    assert twice.equals(once)
    assert tokens["word"].tolist() == ["the", "fox", "of", "the", "dog"]


def test_stop_word_filter_accepts_token_records(novel_documents, stop_words) -> None:
    tokens = list(iter_tokens(annotate_lines(novel_documents)))

    kept = remove_stop_words(iter(tokens), stop_words)

    assert len(kept) == sum(1 for t in tokens if t.word not in stop_words)


def test_load_stop_words_from_file(tmp_path: Path) -> None:
    path = tmp_path / "stop.txt"
    path.write_text("The\n# comment line\nAND  # inline\n\nof\n", encoding="utf-8")

    stop = load_stop_words(path, extra=["Miss"])

    assert stop == frozenset({"the", "and", "of", "miss"})


def test_missing_stop_word_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(MissingReferenceDataError) as exc:
        load_stop_words(tmp_path / "nope.txt")

    assert exc.value.stage == "stopwords"


def test_missing_nltk_stop_words_without_download(monkeypatch: pytest.MonkeyPatch) -> None:
    def not_found(locator):
        raise LookupError(locator)

    monkeypatch.setattr(nltk.data, "find", not_found)

    with pytest.raises(MissingReferenceDataError, match="stopwords"):
        load_stop_words("nltk")
