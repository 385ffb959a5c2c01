# usage: text normalization (gutenberg strip, footnotes removal, newlines)
import re

# Regexes tolerate common START/END variants from Gutenberg dumps
_START_RE = re.compile(
    r"""^(\*\*\*\s*START\s+OF\s+(?:THE|THIS)?\s*PROJECT\s+GUTENBERG\s+EBOOK|\*\*\*\s*START\s+OF\s+.*EBOOK|START\s+OF\s+(?:THE|THIS)?\s*PROJECT\s+GUTENBERG\s+EBOOK)""",
    re.IGNORECASE,
)
_END_RE = re.compile(
    r"""^(\*\*\*\s*END\s+OF\s+(?:THE|THIS)?\s*PROJECT\s+GUTENBERG\s+EBOOK|\*\*\*\s*END\s+OF\s+.*EBOOK|END\s+OF\s+(?:THE|THIS)?\s*PROJECT\s+GUTENBERG\s+EBOOK|End\s+of\s+the\s+Project\s+Gutenberg\s+EBook|End\s+of\s+Project\s+Gutenberg'?s)""",
    re.IGNORECASE,
)

_FOOTNOTE_LEADER = re.compile(r'^\s*\[\s*(\d{1,3}|[ivxlcdm]{1,5}|[a-z])\s*\]\s*', re.IGNORECASE)


def normalize_newlines(text: str) -> str:
    """Convert CR/LF variants to '\\n' without touching line structure."""
    return re.sub(r'\r\n?', '\n', text)


def strip_gutenberg_headers(text: str) -> str:
    """
    Remove Project Gutenberg boilerplate by slicing between
    detected START/END markers (robust to variant phrasings).

    Unlike a whitespace clean-up this keeps every body line as-is, so the
    line numbers assigned downstream match the printed text.
    Falls back to the input (minus surrounding blank lines) if markers are not found.
    """
    lines = normalize_newlines(text).split("\n")

    start_idx, end_idx = 0, len(lines)
    for i, ln in enumerate(lines):
        if _START_RE.search(ln.strip()):
            start_idx = i + 1
            break
    # scan from the bottom for the END marker
    for i in range(len(lines) - 1, start_idx - 1, -1):
        if _END_RE.search(lines[i].strip()):
            end_idx = i
            break

    body = lines[start_idx:end_idx]
    while body and not body[0].strip():
        body.pop(0)
    while body and not body[-1].strip():
        body.pop()
    return "\n".join(body)


def _keep_line_breaks(match) -> str:
    return "\n" * match.group(0).count("\n")


def remove_footnotes(text: str) -> str:
    """
    Heuristically remove inline and trailing-section footnotes.

    Handles:
      - Inline “[Footnote: …]” spans, even across lines.
      - Inline bracketed markers like “[12]”, “[iv]”, “[a]”.
      - A trailing 'FOOTNOTES'/'NOTES' section in the back half of the text.
      - Footnote paragraphs opened by a bracketed marker at line start.
    Removed lines are left blank rather than dropped, so line numbers
    still point at the source text.
    """
    text = normalize_newlines(text)
    text = re.sub(r'\[Footnote:.*?\]', _keep_line_breaks, text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r'(?<!\w)\[(?:\d{1,3}|[ivxlcdm]{1,5}|[a-z])\](?!\w)', '', text, flags=re.IGNORECASE)

    lines = text.split("\n")
    notes_from = len(lines)
    m = re.search(r'^\s*(FOOTNOTES?|NOTES?)\s*$', text, flags=re.IGNORECASE | re.MULTILINE)
    if m and m.start() > len(text) * 0.5:
        notes_from = text.count("\n", 0, m.start())

    out, in_note = [], False
    for i, line in enumerate(lines):
        if _FOOTNOTE_LEADER.match(line):
            in_note = True
        elif not line.strip():
            in_note = False
        out.append("" if in_note or i >= notes_from else line)
    return "\n".join(out)
