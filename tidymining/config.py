# usage: package-wide defaults; environment overrides are read at call time
import os
from typing import Optional

# --------- TEXT RULES ---------
# A heading line starts with "chapter" followed by an arabic or roman numeral
CHAPTER_PATTERN = r"^chapter\s+(?:\d+|[ivxlc]+)\b"

# Letters/digits form words; an inner apostrophe keeps contractions together
WORD_PATTERN = r"[^\W_]+(?:['’][^\W_]+)*"

STOPWORD_LANGUAGE = "english"

# --------- AGGREGATION ---------
GROUP_BY_CHOICES = ("word", "word+sentiment", "word+document")
DEFAULT_TOPN = 10
SENTIMENT_WINDOW = 80  # lines per block for sentiment trajectories

# --------- REPORTING ---------
WORDCLOUD_WIDTH = 800
WORDCLOUD_HEIGHT = 400
WORDCLOUD_MAX_WORDS = 100
WORDCLOUD_COLORMAP = "viridis"
SENTIMENT_PALETTE = {
    "positive": "#1b9e77",
    "negative": "#d95f02",
    "neutral": "#7570b3",
}

# --------- NETWORK ---------
GUTENDEX_BASES = ["https://gutendex.com", "https://api.gutendex.com"]
DEFAULT_TIMEOUT = (6, 75)  # (connect, read) seconds
USER_AGENT = "tidymining-gutendex/0.1"


def nrc_path() -> Optional[str]:
    """Location of the NRC word-level lexicon file, if configured."""
    return os.environ.get("TIDYMINING_NRC_PATH") or None


def nltk_download_enabled() -> bool:
    """NLTK data is fetched on first use unless TIDYMINING_NLTK_DOWNLOAD=0."""
    return os.environ.get("TIDYMINING_NLTK_DOWNLOAD", "1").strip().lower() not in ("0", "false", "no")
