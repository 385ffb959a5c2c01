import pandas as pd
import pytest

from tidymining.etl.corpus import documents_from_mapping
from tidymining.nlp.lexicons import Lexicon


@pytest.fixture(autouse=True)
def no_nltk_downloads(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIDYMINING_NLTK_DOWNLOAD", "0")
    monkeypatch.delenv("TIDYMINING_NRC_PATH", raising=False)


@pytest.fixture
def novel_documents():
    return documents_from_mapping({
        "Northanger": [
            "Preface",
            "CHAPTER I",
            "No one who had ever seen Catherine in her infancy",
            "would have supposed her born to be a happy heroine.",
            "Chapter 2",
            "She was fond of all boy's plays; she loved the joy of it.",
        ],
        "Mansfield": "Chapter 1\nAbout thirty years ago Miss Maria Ward had the good luck\nto captivate Sir Thomas.",
    })


@pytest.fixture
def stop_words():
    return frozenset({"the", "a", "of", "to", "be", "in", "her", "she", "had", "who", "no", "one", "was", "all", "it"})


@pytest.fixture
def bing_like() -> Lexicon:
    return Lexicon.from_mapping("mini", {
        "happy": "positive",
        "good": "positive",
        "luck": "positive",
        "joy": "positive",
        "loved": "positive",
        "captivate": "positive",
        "fond": "positive",
        "infancy": "negative",
        "hate": "negative",
    })


@pytest.fixture
def make_tokens():
    def _make(words, document="doc", line_number=1, chapter=0) -> pd.DataFrame:
        return pd.DataFrame({
            "document": [document] * len(words),
            "line_number": [line_number] * len(words),
            "chapter": [chapter] * len(words),
            "word": list(words),
        })

    return _make
