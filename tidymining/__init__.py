"""
tidymining: tidy-data text mining for literary corpora.

Load texts, number lines and chapters, tokenize one word per row, drop stop
words, count, join against sentiment lexicons and report.
"""

# Package version identifier
__version__ = "0.1.0"
