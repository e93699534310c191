"""
Poem Parser for the Poem Imagery Pipeline

PURPOSE:
This module splits raw corpus text into discrete poem records using a
line-based heading convention. Each record is enriched with its imagery
counts at parse time.

============================================================
HEADING CONVENTION (DOCUMENTED)
============================================================

A line is a TITLE LINE iff it starts with:
- "<digits>.<digits>"        e.g. "1.1 静夜思"
- "<digits>.<non-digit>"     e.g. "12.春晓"

The title is the text after the first "." with surrounding whitespace
removed. The poem id is the title.

Every other non-blank line is a verse line of the current poem.
Verse lines before the first heading are dropped.
A heading followed by no verse lines produces no poem.

============================================================
FAIL-SOFT RESULTS
============================================================

- Empty / whitespace-only text  -> []
- No heading anywhere            -> [] (input not poem-formatted)

Both surface as []. Callers that need to tell them apart check the
text themselves (see run_imagery_pipeline.py).

============================================================
STORAGE
============================================================

Corpus text is read from: data/raw/{corpus_name}.txt
Parsed poems are stored per run_id in:
- JSON artifact: data/poems/{corpus_name}/{run_id}.poems.json
"""

import os
import re
import json
from dataclasses import asdict
from typing import Optional
from dotenv import load_dotenv

from dict.imagery_dictionary import IMAGERY_DICTIONARY_VERSION
from imagery_extraction import extract_imagery
from poem_models import Poem, poem_from_dict
from text_utils import split_lines
load_dotenv()

# --------------------------------------------------
# Configuration
# --------------------------------------------------

RAW_CORPUS_DIR = os.getenv("IMAGERY_RAW_DIR", "data/raw")

POEMS_DIR = os.getenv("IMAGERY_POEMS_DIR", "data/poems")

# "1.2..." (numeric title) or "1.X..." (index + title)
NUMERIC_TITLE_PATTERN = re.compile(r"^[0-9]+\.[0-9]+")
INDEXED_TITLE_PATTERN = re.compile(r"^[0-9]+\.[^0-9]")
TITLE_TEXT_PATTERN = re.compile(r"^[0-9]+\.(.*)")


# --------------------------------------------------
# Parsing
# --------------------------------------------------

def is_title_line(line: str) -> bool:
    """Return True if the line opens a new poem."""
    return bool(NUMERIC_TITLE_PATTERN.match(line) or INDEXED_TITLE_PATTERN.match(line))


def _title_from_line(line: str) -> str:
    match = TITLE_TEXT_PATTERN.match(line)
    return match.group(1).strip() if match else line


def _make_poem(title: str, content: str) -> Poem:
    return Poem(
        id=title,
        title=title,
        content=content,
        imagery=extract_imagery(content),
        word_associations=[],
    )


def parse_poems(text: str) -> list[Poem]:
    """
    Split raw corpus text into poems.

    Returns:
        Poems in document order, each with imagery counts filled in
        and word_associations empty. [] for blank or unrecognised input.
    """
    if not text or not text.strip():
        return []

    poems = []
    current_title = ""
    current_lines = []
    found_heading = False

    for line in split_lines(text):
        if is_title_line(line):
            found_heading = True
            if current_title and current_lines:
                poems.append(_make_poem(current_title, "\n".join(current_lines)))
            current_title = _title_from_line(line)
            current_lines = []
        elif current_title:
            current_lines.append(line)

    if current_title and current_lines:
        poems.append(_make_poem(current_title, "\n".join(current_lines)))

    if not found_heading:
        return []

    return poems


# --------------------------------------------------
# Data Loading
# --------------------------------------------------

def load_corpus_text(corpus_name: str, source_path: Optional[str] = None) -> str:
    """
    Read a UTF-8 corpus file.

    Defaults to data/raw/{corpus_name}.txt.

    Raises:
        FileNotFoundError: If the corpus file does not exist.
    """
    path = source_path or os.path.join(RAW_CORPUS_DIR, f"{corpus_name}.txt")

    if not os.path.isfile(path):
        raise FileNotFoundError(f"Corpus file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def load_poems(corpus_name: str, run_id: str = "") -> Optional[tuple[list[Poem], str]]:
    """
    Load a parsed-poem artifact.

    Uses the given run_id, or the most recent artifact if run_id is empty.
    Returns (poems, run_id), or None if no artifact exists.

    Raises:
        ValueError: If the artifact holds malformed poem records.
    """
    poems_dir = os.path.join(POEMS_DIR, corpus_name)

    if not os.path.isdir(poems_dir):
        return None

    if run_id:
        target_file = os.path.join(poems_dir, f"{run_id}.poems.json")
        if not os.path.isfile(target_file):
            return None
        source_id = run_id
    else:
        poem_files = [f for f in os.listdir(poems_dir) if f.endswith(".poems.json")]
        if not poem_files:
            return None
        poem_files.sort(key=lambda f: os.path.getmtime(os.path.join(poems_dir, f)), reverse=True)
        target_file = os.path.join(poems_dir, poem_files[0])
        source_id = poem_files[0].replace(".poems.json", "")

    with open(target_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    records = data.get("poems") if isinstance(data, dict) else None
    if not isinstance(records, list):
        raise ValueError(f"Poem artifact has no 'poems' list: {target_file}")

    return [poem_from_dict(record) for record in records], source_id


# --------------------------------------------------
# Persistence
# --------------------------------------------------

def save_poems(poems: list[Poem], corpus_name: str, run_id: str) -> str:
    """
    Save parsed poems as a JSON artifact.

    Path: data/poems/{corpus_name}/{run_id}.poems.json
    """
    output_dir = os.path.join(POEMS_DIR, corpus_name)
    os.makedirs(output_dir, exist_ok=True)

    output_file = os.path.join(output_dir, f"{run_id}.poems.json")

    artifact = {
        "corpus_name": corpus_name,
        "run_id": run_id,
        "imagery_dictionary_version": IMAGERY_DICTIONARY_VERSION,
        "total_poems": len(poems),
        "poems": [asdict(poem) for poem in poems],
    }

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(artifact, f, indent=2, ensure_ascii=False)

    return output_file
