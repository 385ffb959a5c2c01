# Command-line script for tidy text mining over a corpus.
# Writes word counts, sentiment counts, windowed sentiment, charts and word clouds.

import argparse
import logging
from pathlib import Path

from tidymining import config
from tidymining.etl.corpus import austen_books, load_text_files
from tidymining.etl.gutenberg import download_gutenberg
from tidymining.nlp.annotate import compile_chapter_pattern
from tidymining.nlp.features import validate_count_options
from tidymining.nlp.lexicons import load_lexicon
from tidymining.nlp.pipeline import run_pipeline
from tidymining.nlp.preprocessing import load_stop_words
from tidymining.nlp.sentiment import validate_window
from tidymining.report import (
    plot_sentiment_trajectory,
    plot_top_words,
    render_word_cloud,
    write_summary,
    write_table,
)
from tidymining.shared.errors import MalformedConfigurationError, TidyMiningError


def load_corpus(args):
    """Resolve the --source option into a list of Documents."""
    download = False if args.no_download else None
    if args.source == "austen":
        return austen_books(download=download)
    if args.source == "files":
        if not args.input:
            raise MalformedConfigurationError("--source files needs at least one --input path", stage="corpus")
        return load_text_files(args.input, keep_footnotes=not args.remove_footnotes)
    if not args.gutenberg_ids:
        raise MalformedConfigurationError("--source gutenberg needs --gutenberg-ids", stage="corpus")
    paths = download_gutenberg(args.gutenberg_ids, Path(args.outdir) / "texts")
    return load_text_files(paths, strip_gut=False, keep_footnotes=not args.remove_footnotes)


def analyze(args):
    """
    Run the pipeline once and write every report into --outdir.
    Options and reference data are checked before the corpus is read.
    """
    validate_count_options(args.group_by, args.min_count, args.topn)
    validate_window(args.window)
    compile_chapter_pattern(args.chapter_pattern)
    download = False if args.no_download else None
    stop_words = load_stop_words(args.stopwords, extra=args.extra_stopwords, download=download)
    lexicon = load_lexicon(args.lexicon, nrc_path=args.nrc_path, download=download) if args.lexicon else None

    documents = load_corpus(args)
    result = run_pipeline(
        documents,
        stop_words,
        lexicon,
        chapter_pattern=args.chapter_pattern,
        group_by=args.group_by,
        min_count=args.min_count,
        window=args.window,
    )

    outdir = Path(args.outdir)
    topn = args.topn
    word_counts = result["word_counts"]
    write_table(word_counts, outdir / f"word_counts_{args.group_by.replace('+', '_')}.csv")

    if args.charts:
        plot_top_words(word_counts, outdir / "top_words.png", top_n=topn,
                       title="Most common words")
    if args.wordcloud:
        render_word_cloud(word_counts, outdir / "wordcloud.png", max_words=args.max_words, colormap=args.colormap)

    meta = {
        "documents": [d.document_id for d in documents],
        "line_count": len(result["lines"]),
        "token_count": result["token_count"],
        "vocab_size": result["vocab_size"],
        "type_token_ratio": result["type_token_ratio"],
        "stop_words": str(args.stopwords),
    }

    if lexicon is not None:
        sentiment_counts = result["sentiment_counts"]
        write_table(sentiment_counts, outdir / f"sentiment_counts_{lexicon.name}.csv")
        write_table(result["sentiment_windows"], outdir / f"sentiment_windows_{lexicon.name}.csv")
        if args.charts:
            plot_top_words(sentiment_counts, outdir / f"sentiment_words_{lexicon.name}.png",
                           top_n=topn, title=f"Sentiment contributions ({lexicon.name})")
            plot_sentiment_trajectory(result["sentiment_windows"], outdir / f"sentiment_trajectory_{lexicon.name}.png",
                                      title=f"Net sentiment per {args.window} lines ({lexicon.name})")
        if args.wordcloud:
            render_word_cloud(sentiment_counts, outdir / f"wordcloud_{lexicon.name}.png",
                              max_words=args.max_words, colormap=args.colormap)
        meta.update({"lexicon": lexicon.name, "lexicon_kind": lexicon.kind, "matched_tokens": len(result["joined"])})

    write_table(word_counts.head(topn), outdir / f"word_counts_top{topn}.csv")
    write_summary(meta, outdir / "summary.json")
    return meta


def build_parser():
    ap = argparse.ArgumentParser(description="Tidy text mining: word counts, sentiment joins, charts, word clouds.")
    ap.add_argument("--source", choices=("austen", "files", "gutenberg"), default="austen",
                    help="Corpus: NLTK's bundled Austen novels, local files, or Gutenberg ids.")
    ap.add_argument("--input", nargs="+", help="Files or directories for --source files.")
    ap.add_argument("--gutenberg-ids", nargs="+", type=int, help="Book ids for --source gutenberg.")
    ap.add_argument("--remove-footnotes", action="store_true")
    ap.add_argument("--chapter-pattern", default=config.CHAPTER_PATTERN,
                    help="Regex (case-insensitive) marking a chapter heading line.")
    ap.add_argument("--stopwords", default="nltk", help="'nltk' or a one-word-per-line file.")
    ap.add_argument("--extra-stopwords", nargs="*", default=[], help="Additional words to drop.")
    ap.add_argument("--lexicon", default="bing", help="bing | vader | nrc | CSV path; empty string to skip.")
    ap.add_argument("--nrc-path", default=None, help="NRC word-level lexicon file (or TIDYMINING_NRC_PATH).")
    ap.add_argument("--group-by", choices=("word", "word+document"), default="word",
                    help="Word counts keyed by word or by word and document.")
    ap.add_argument("--min-count", type=int, default=1)
    ap.add_argument("--topn", type=int, default=config.DEFAULT_TOPN,
                    help="Rows in the top-N table and charts (counts tables stay complete).")
    ap.add_argument("--window", type=int, default=config.SENTIMENT_WINDOW, help="Lines per sentiment block.")
    ap.add_argument("--charts", action="store_true", help="Write bar charts.")
    ap.add_argument("--wordcloud", action="store_true", help="Write word clouds.")
    ap.add_argument("--max-words", type=int, default=config.WORDCLOUD_MAX_WORDS)
    ap.add_argument("--colormap", default=config.WORDCLOUD_COLORMAP)
    ap.add_argument("--no-download", action="store_true", help="Never download NLTK data.")
    ap.add_argument("--outdir", default="data/outputs", help="Output directory for CSV/JSON/PNG.")
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv=None):
    """
    CLI entrypoint: parses arguments and runs the analysis.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="[%(levelname)s] %(message)s")
    try:
        meta = analyze(args)
    except TidyMiningError as e:
        raise SystemExit(f"error: {e}")
    print(f"NLP ✓ {len(meta['documents'])} documents, {meta['token_count']} tokens -> {args.outdir}")


if __name__ == "__main__":
    main()
