# usage: locate NLTK data packages, downloading them quietly on first use
import logging

import nltk

from tidymining import config
from tidymining.shared.errors import MissingReferenceDataError

logger = logging.getLogger(__name__)

# package name -> locator used by nltk.data.find
NLTK_LOCATORS = {
    "stopwords": "corpora/stopwords",
    "gutenberg": "corpora/gutenberg",
    "opinion_lexicon": "corpora/opinion_lexicon",
    "vader_lexicon": "sentiment/vader_lexicon.zip",
}


def ensure_nltk_resource(pkg: str, *, stage: str, download=None) -> None:
    """
    Make sure an NLTK data package is available.

    Tries `nltk.data.find` first; when missing and downloads are enabled,
    fetches the package quietly and checks again.

    Raises:
        MissingReferenceDataError: the package is still missing afterwards.
    """
    locator = NLTK_LOCATORS.get(pkg, pkg)
    if download is None:
        download = config.nltk_download_enabled()
    try:
        nltk.data.find(locator)
        return
    except LookupError:
        if not download:
            raise MissingReferenceDataError(
                f"NLTK data package '{pkg}' not found and downloads are disabled", stage=stage
            ) from None

    logger.info("Downloading NLTK data package %s", pkg)
    nltk.download(pkg, quiet=True)
    try:
        nltk.data.find(locator)
    except LookupError:
        raise MissingReferenceDataError(f"NLTK data package '{pkg}' could not be downloaded", stage=stage) from None
