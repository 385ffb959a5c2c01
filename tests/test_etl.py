from pathlib import Path

import pytest

from tidymining.etl.corpus import documents_from_mapping, iter_records, load_text_files, make_document
from tidymining.etl.gutenberg import download_gutenberg, fetch_book_meta, pick_text_format
from tidymining.etl.ingest_texts import process_one
from tidymining.etl.normalizers import remove_footnotes, strip_gutenberg_headers
from tidymining.shared.errors import MalformedConfigurationError, MissingReferenceDataError
from tidymining.shared.io_utils import book_path, parse_book_filename, safe_filename

BOOK = (
    "The Project Gutenberg eBook of Persuasion\r\n"
    "\r\n"
    "*** START OF THE PROJECT GUTENBERG EBOOK PERSUASION ***\r\n"
    "\r\n"
    "Chapter 1\r\n"
    "Sir Walter Elliot, of Kellynch Hall,\r\n"
    "\r\n"
    "*** END OF THE PROJECT GUTENBERG EBOOK PERSUASION ***\r\n"
    "License text\r\n"
)


def test_strip_gutenberg_keeps_body_lines() -> None:
    assert strip_gutenberg_headers(BOOK) == "Chapter 1\nSir Walter Elliot, of Kellynch Hall,"


def test_strip_gutenberg_without_markers() -> None:
    assert strip_gutenberg_headers("\n\nplain\n  text\n\n") == "plain\n  text"


def test_remove_footnotes_markers_and_paragraphs() -> None:
    assert remove_footnotes("Kellynch [12] Hall") == "Kellynch  Hall"
    assert remove_footnotes("text\n[ 1 ] a note\ncontinues\n\nmore") == "text\n\n\n\nmore"


def test_remove_footnotes_keeps_line_numbers() -> None:
    text = "one\ntwo [Footnote: spans\ntwo lines] end\nthree\nfour\nNOTES\n1. See above"

    lines = remove_footnotes(text).split("\n")

    assert len(lines) == len(text.split("\n"))
    assert lines == ["one", "two ", " end", "three", "four", "", ""]


def test_records_keep_corpus_order() -> None:
    docs = documents_from_mapping({"b": "x\ny", "a": ["z"]})

    assert list(iter_records(docs)) == [("b", 0, "x"), ("b", 1, "y"), ("a", 0, "z")]


def test_documents_are_immutable_and_unique() -> None:
    doc = make_document("d", "one\ntwo")

    assert doc.lines == ("one", "two")
    with pytest.raises(AttributeError):
        doc.lines = ()
    with pytest.raises(MalformedConfigurationError):
        documents_from_mapping({"d": "x", 1: "y", "1": "z"})
    assert make_document("e", "").lines == ()


def test_final_newline_does_not_add_a_line(tmp_path: Path) -> None:
    assert make_document("b", "one\ntwo\n").lines == ("one", "two")
    assert make_document("b", "one\r\ntwo\r\n\r\n").lines == ("one", "two", "")

    (tmp_path / "raw.txt").write_text("first\nsecond\n", encoding="utf-8")
    docs = load_text_files([tmp_path / "raw.txt"], strip_gut=False)

    assert docs[0].lines == ("first", "second")


def test_load_text_files_from_directory(tmp_path: Path) -> None:
    (tmp_path / "persuasion.txt").write_text(BOOK, encoding="utf-8")
    (tmp_path / "notes.md").write_text("line one\nline two\n", encoding="utf-8")
    (tmp_path / "skip.csv").write_text("a,b\n", encoding="utf-8")

    docs = load_text_files([tmp_path])

    assert [d.document_id for d in docs] == ["notes", "persuasion"]
    assert docs[1].lines == ("Chapter 1", "Sir Walter Elliot, of Kellynch Hall,")


def test_load_text_files_missing(tmp_path: Path) -> None:
    with pytest.raises(MissingReferenceDataError):
        load_text_files([tmp_path / "absent.txt"])
    empty = tmp_path / "empty"
    empty.mkdir()
    with pytest.raises(MissingReferenceDataError):
        load_text_files([empty])


def test_process_one_writes_text_and_meta(tmp_path: Path) -> None:
    src = tmp_path / "Persuasion.txt"
    src.write_text(BOOK, encoding="utf-8")

    cpath = process_one(src, tmp_path / "clean")

    assert cpath.read_text(encoding="utf-8") == "Chapter 1\nSir Walter Elliot, of Kellynch Hall,"
    assert (tmp_path / "clean" / "Persuasion_meta.json").exists()


def test_filenames() -> None:
    assert safe_filename("Sense & Sensibility") == "Sense_Sensibility"
    assert safe_filename("???") == "untitled"
    path = book_path(Path("/tmp/books"), "Pride and Prejudice", "Austen, Jane", 1342)
    assert path.name == "Pride_and_Prejudice__Austen_Jane__pg1342.txt"
    assert parse_book_filename(path.name) == ("Pride and Prejudice", "Austen Jane", 1342)


def test_long_book_paths_are_truncated() -> None:
    path = book_path(Path("/tmp/books"), "x" * 400, "y", 7, max_total=120)

    assert len(str(path)) <= 120
    assert path.suffix == ".txt"


def test_pick_text_format_prefers_utf8() -> None:
    formats = {
        "text/html": "https://example.org/1.html",
        "text/plain; charset=us-ascii": "https://example.org/1.txt",
        "text/plain; charset=utf-8": "https://example.org/1-0.txt",
        "text/plain": "https://example.org/1.zip",
    }

    assert pick_text_format(formats) == "https://example.org/1-0.txt"
    assert pick_text_format({"text/html": "x"}) is None


class FakeResponse:
    def __init__(self, payload=None, text=""):
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("not json")
        return self._payload

    def raise_for_status(self):
        return None


class FakeSession:
    def __init__(self, meta, text):
        self.meta = meta
        self.text = text
        self.urls = []

    def get(self, url, **kwargs):
        self.urls.append(url)
        if "/books/" in url:
            return FakeResponse(payload=self.meta)
        return FakeResponse(text=self.text)


def test_download_gutenberg_saves_stripped_text(tmp_path: Path) -> None:
    meta = {
        "id": 105,
        "title": "Persuasion",
        "authors": [{"name": "Austen, Jane"}],
        "formats": {"text/plain; charset=utf-8": "https://example.org/105-0.txt"},
    }
    session = FakeSession(meta, BOOK)

    paths = download_gutenberg([105], tmp_path, session=session)

    assert [p.name for p in paths] == ["Persuasion__Austen_Jane__pg105.txt"]
    assert paths[0].read_text(encoding="utf-8").startswith("Chapter 1")

    again = download_gutenberg([105], tmp_path, session=session)
    assert again == paths
    assert session.urls.count("https://example.org/105-0.txt") == 1


def test_fetch_book_meta_reports_every_host() -> None:
    session = FakeSession({"detail": "Not found."}, "")

    with pytest.raises(RuntimeError, match="All Gutendex bases failed") as exc:
        fetch_book_meta(session, 1, bases=["https://a.example", "https://b.example"])

    assert "a.example" in str(exc.value) and "b.example" in str(exc.value)


def test_austen_books_from_nltk_corpus(monkeypatch: pytest.MonkeyPatch) -> None:
    import nltk.corpus

    class FakeGutenberg:
        def raw(self, fileid):
            return f"[{fileid}]\nCHAPTER I\ntext"

    monkeypatch.setattr("tidymining.etl.corpus.ensure_nltk_resource", lambda *a, **k: None)
    monkeypatch.setattr(nltk.corpus, "gutenberg", FakeGutenberg())

    from tidymining.etl.corpus import austen_books

    docs = austen_books()

    assert [d.document_id for d in docs] == ["Sense & Sensibility", "Emma", "Persuasion"]
    assert docs[1].lines == ("[austen-emma.txt]", "CHAPTER I", "text")


def test_downloaded_books_are_named_by_title(tmp_path: Path) -> None:
    (tmp_path / "Persuasion__Austen_Jane__pg105.txt").write_text("Chapter 1\ntext", encoding="utf-8")

    (doc,) = load_text_files([tmp_path])

    assert doc.document_id == "Persuasion"
