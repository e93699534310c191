import re
import uuid
from datetime import datetime, timezone

# --------------------------------------------------
# Delimiters
# --------------------------------------------------

# Sentence delimiters for the per-poem relationship pass.
SENTENCE_DELIMITERS = re.compile(r"[。！？\n]")

# Clause delimiters for the corpus-wide association pass.
# Broader than SENTENCE_DELIMITERS: commas, semicolons, colons and any whitespace.
CLAUSE_DELIMITERS = re.compile(r"[，。！？；：\s]")


# --------------------------------------------------
# Splitting
# --------------------------------------------------

def split_lines(text: str) -> list[str]:
    """Split text into its non-blank lines (trailing carriage returns removed)."""
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line.strip()]


def split_sentences(text: str) -> list[str]:
    """
    Split text on 。！？ and newlines, dropping blank pieces.

    Pieces are returned untrimmed.
    """
    return [s for s in SENTENCE_DELIMITERS.split(text) if s.strip()]


def split_clauses(text: str) -> list[str]:
    """Split text on ，。！？；： and whitespace, dropping empty pieces."""
    return [s for s in CLAUSE_DELIMITERS.split(text) if s]


def unique_characters(text: str) -> list[str]:
    """Distinct characters of text, in first-seen order."""
    return list(dict.fromkeys(text))


# --------------------------------------------------
# Run identifiers
# --------------------------------------------------

def new_run_id() -> str:
    """Return a fresh, sortable run identifier."""
    return f"run_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
