# usage: tidymining-ingest --gutenberg-ids 1342 84 --outdir data/raw
#        tidymining-ingest --input "path|dir" --outdir data/clean [--remove-footnotes] [--no-strip-gutenberg]
import argparse
import json
import logging
from hashlib import sha1
from pathlib import Path

from tidymining.etl.corpus import load_text_files
from tidymining.etl.gutenberg import download_gutenberg
from tidymining.shared.errors import TidyMiningError
from tidymining.shared.io_utils import safe_filename


def process_one(ipath: Path, outdir: Path, *, strip_gut=True, keep_footnotes=True) -> Path:
    """
    Clean one source file -> canonical UTF-8 .txt + JSON sidecar with minimal provenance.

    Steps:
      1) Read raw text (.txt/.md/.rst/.docx).
      2) Optionally strip Project Gutenberg boilerplate (headers/footers).
      3) Optionally remove footnotes.
      4) Save as `<stem>.txt` + `<stem>_meta.json`; line breaks are kept.
    """
    (doc,) = load_text_files([ipath], strip_gut=strip_gut, keep_footnotes=keep_footnotes)
    text = "\n".join(doc.lines)

    tag = safe_filename(doc.document_id)
    outdir.mkdir(parents=True, exist_ok=True)
    cpath = outdir / f"{tag}.txt"
    cpath.write_text(text, encoding="utf-8")

    meta = {
        "source_path": str(ipath),
        "source_sha1": sha1(ipath.read_bytes()).hexdigest(),
        "clean_path": str(cpath),
        "steps": [
            "strip_gutenberg" if strip_gut else "no_strip",
            "keep_footnotes" if keep_footnotes else "remove_footnotes",
        ],
        "line_count": len(doc.lines),
        "char_count": len(text),
    }
    (outdir / f"{tag}_meta.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")
    return cpath


def main(argv=None):
    """CLI: download Gutenberg books by id, or clean local files/directories."""
    ap = argparse.ArgumentParser(description="Fetch or clean texts into canonical .txt files.")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", help="File or directory (.txt/.md/.rst/.docx).")
    src.add_argument("--gutenberg-ids", nargs="+", type=int, help="Project Gutenberg book ids to download.")
    ap.add_argument("--outdir", default="data/clean", help="Output directory for texts.")
    ap.add_argument("--remove-footnotes", action="store_true", help="Drop footnote markers and sections.")
    ap.add_argument("--no-strip-gutenberg", action="store_true", help="Do not strip Project Gutenberg headers/footers.")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="[%(levelname)s] %(message)s")
    outdir = Path(args.outdir)

    try:
        if args.gutenberg_ids:
            for p in download_gutenberg(args.gutenberg_ids, outdir):
                print(f"Gutenberg ✓ {p.name}")
            return

        ip = Path(args.input)
        paths = [ip] if ip.is_file() else sorted(
            p for pat in ("*.txt", "*.md", "*.rst", "*.docx") for p in ip.rglob(pat)
        )
        if not paths:
            raise SystemExit("No supported files found.")
        for p in paths:
            cpath = process_one(
                p, outdir, strip_gut=not args.no_strip_gutenberg, keep_footnotes=not args.remove_footnotes
            )
            print(f"ETL ✓ {p.name} -> {cpath.name}")
    except TidyMiningError as e:
        raise SystemExit(str(e))


if __name__ == "__main__":
    main()
