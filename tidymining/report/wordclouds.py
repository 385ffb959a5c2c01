# usage: word clouds from frequency tables (layout delegated to the wordcloud package)
import logging
from pathlib import Path

from wordcloud import WordCloud

from tidymining import config

logger = logging.getLogger(__name__)


def render_word_cloud(freq, path, *, max_words=config.WORDCLOUD_MAX_WORDS, colormap=config.WORDCLOUD_COLORMAP,
                      palette=None, width=config.WORDCLOUD_WIDTH, height=config.WORDCLOUD_HEIGHT):
    """
    Save a PNG word cloud sized by `count`.

    When the table has a `sentiment` column each word is coloured by its
    label from `palette` (default: the sentiment palette); a word listed
    under several labels takes the label with its highest count.
    """
    if freq.empty:
        logger.warning("No words to draw for %s", path)
        return

    ranked = freq.sort_values("count", ascending=False, kind="mergesort")
    ranked = ranked.drop_duplicates("word").head(max_words)
    frequencies = dict(zip(ranked["word"], ranked["count"].astype(int)))

    wc = WordCloud(width=width, height=height, max_words=max_words, colormap=colormap,
                   background_color="white", random_state=42)
    wc.generate_from_frequencies(frequencies)

    if "sentiment" in ranked.columns:
        palette = palette or config.SENTIMENT_PALETTE
        label_of = dict(zip(ranked["word"], ranked["sentiment"]))

        def color_func(word, **kwargs):
            return palette.get(label_of.get(word), "#555555")

        wc.recolor(color_func=color_func)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wc.to_file(str(path))
