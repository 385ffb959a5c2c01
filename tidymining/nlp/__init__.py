# Expose the tidy text-mining stages for easier imports when using this package.

from .annotate import AnnotatedLine, annotate_lines, iter_annotated_lines   # line numbers + chapters
from .preprocessing import (                                                # tokens and stop words
    Token,
    iter_tokens,
    unnest_tokens,
    unnest_ngrams,
    load_stop_words,
    remove_stop_words,
)
from .features import count_words, expand_counts, validate_count_options  # frequency tables
from .lexicons import Lexicon, SentimentEntry, load_lexicon                # sentiment lexicons
from .sentiment import join_lexicon, sentiment_by_window, validate_window  # lexicon joins
from .pipeline import run_pipeline                                         # end-to-end run

# Define what symbols are exported when `from package import *` is used
__all__ = [
    "AnnotatedLine",
    "annotate_lines",
    "iter_annotated_lines",
    "Token",
    "iter_tokens",
    "unnest_tokens",
    "unnest_ngrams",
    "load_stop_words",
    "remove_stop_words",
    "count_words",
    "expand_counts",
    "validate_count_options",
    "Lexicon",
    "SentimentEntry",
    "load_lexicon",
    "join_lexicon",
    "sentiment_by_window",
    "validate_window",
    "run_pipeline",
]

# Package version identifier
__version__ = "0.1.0"
