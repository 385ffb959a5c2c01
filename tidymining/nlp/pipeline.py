# usage: annotate → tokenize → stop words → lexicon join → counts, over an in-memory corpus
import logging
from typing import Iterable, Optional

import pandas as pd

from tidymining import config
from tidymining.nlp.annotate import LINE_COLUMNS, annotate_lines, compile_chapter_pattern
from tidymining.nlp.features import count_words, validate_count_options
from tidymining.nlp.lexicons import Lexicon
from tidymining.nlp.preprocessing import TOKEN_COLUMNS, remove_stop_words, unnest_tokens
from tidymining.nlp.sentiment import join_lexicon, sentiment_by_window, validate_window
from tidymining.shared.errors import MalformedConfigurationError, PipelineStageError, TidyMiningError

logger = logging.getLogger(__name__)


def _run_stage(stage, func, *args, document_id=None):
    try:
        return func(*args)
    except TidyMiningError:
        raise
    except Exception as e:
        raise PipelineStageError(f"{type(e).__name__}: {e}", stage=stage, document_id=document_id) from e


def run_pipeline(documents: Iterable,
                 stop_words,
                 lexicon: Optional[Lexicon] = None,
                 *,
                 chapter_pattern=None,
                 group_by="word",
                 min_count=1,
                 top_n=None,
                 window=config.SENTIMENT_WINDOW):
    """
    Run the tidy text-mining pipeline and return every intermediate table.

    All options are validated before the first document is touched, so a bad
    option never leaves partial output behind.
    """
    heading = compile_chapter_pattern(chapter_pattern)
    validate_count_options(group_by, min_count, top_n)
    if group_by == "word+sentiment" and lexicon is None:
        raise MalformedConfigurationError("group_by='word+sentiment' needs a lexicon", stage="count")
    validate_window(window)

    line_frames, token_frames = [], []
    for doc in documents:
        lines = _run_stage("annotate", annotate_lines, [doc], heading, document_id=doc.document_id)
        tokens = _run_stage("tokenize", unnest_tokens, lines, document_id=doc.document_id)
        logger.debug("%s: %d lines, %d tokens", doc.document_id, len(lines), len(tokens))
        line_frames.append(lines)
        token_frames.append(tokens)

    lines = pd.concat(line_frames, ignore_index=True) if line_frames else pd.DataFrame(columns=LINE_COLUMNS)
    tokens = pd.concat(token_frames, ignore_index=True) if token_frames else pd.DataFrame(columns=TOKEN_COLUMNS)
    tokens_nostop = _run_stage("stopwords", remove_stop_words, tokens, stop_words)

    word_group = group_by if group_by != "word+sentiment" else "word"
    out = {
        "lines": lines,
        "tokens": tokens,
        "tokens_nostop": tokens_nostop,
        "word_counts": _run_stage("count", count_words, tokens_nostop, word_group, min_count, top_n),
        "joined": None,
        "sentiment_counts": None,
        "sentiment_windows": None,
    }

    if lexicon is not None:
        joined = _run_stage("join", join_lexicon, tokens_nostop, lexicon)
        out["joined"] = joined
        out["sentiment_counts"] = _run_stage("count", count_words, joined, "word+sentiment", min_count, top_n)
        out["sentiment_windows"] = _run_stage("sentiment", sentiment_by_window, joined, lexicon.kind, window,
                                           lexicon.labels)

    vocab_size = int(tokens_nostop["word"].nunique())
    token_count = len(tokens_nostop)
    out.update({
        "token_count": token_count,
        "vocab_size": vocab_size,
        "type_token_ratio": (vocab_size / token_count) if token_count else 0.0,
    })
    return out
