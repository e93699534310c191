"""
Shared value types for the imagery pipeline.

Every stage exchanges these plain dataclasses. They carry no behaviour
beyond (de)serialisation, and no stage keeps them between calls.
"""

from dataclasses import dataclass, field


@dataclass
class ImageryCount:
    """Occurrences of one lexicon term in one text (count > 0)."""
    word: str
    count: int


@dataclass
class Occurrence:
    """Where an imagery/word association was observed."""
    poem_id: str
    sentence: str


@dataclass
class WordAssociation:
    """
    A word associated with an imagery term across the corpus.

    strength = count / corpus frequency of the word, recomputed on every
    increment. occurrences is append-only and never de-duplicated.
    """
    word: str
    count: int
    strength: float
    occurrences: list[Occurrence] = field(default_factory=list)


@dataclass
class Poem:
    """
    A parsed poem.

    id is derived from the title. imagery and word_associations are
    enrichment fields filled in by downstream stages.
    """
    id: str
    title: str
    content: str
    imagery: list[ImageryCount] = field(default_factory=list)
    word_associations: list[WordAssociation] = field(default_factory=list)


# --------------------------------------------------
# Deserialisation (boundary validation)
# --------------------------------------------------

def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Poem record field '{key}' must be a string, got {type(value).__name__}")
    return value


def _require_list(data: dict, key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"Poem record field '{key}' must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, dict):
            raise ValueError(f"Poem record field '{key}' must hold objects, got {type(item).__name__}")
    return value


def _require_number(data: dict, key: str, convert, default):
    value = data.get(key, default)
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Poem record field '{key}' must be numeric, got {value!r}") from e


def poem_from_dict(data: dict) -> Poem:
    """
    Rebuild a Poem from its JSON form (as written by dataclasses.asdict).

    Raises:
        ValueError: If the record is not shaped like a poem.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Poem record must be an object, got {type(data).__name__}")

    imagery = [
        ImageryCount(word=_require_str(item, "word"), count=_require_number(item, "count", int, 0))
        for item in _require_list(data, "imagery")
    ]

    associations = []
    for item in _require_list(data, "word_associations"):
        occurrences = [
            Occurrence(poem_id=_require_str(occ, "poem_id"), sentence=_require_str(occ, "sentence"))
            for occ in _require_list(item, "occurrences")
        ]
        associations.append(WordAssociation(
            word=_require_str(item, "word"),
            count=_require_number(item, "count", int, 0),
            strength=_require_number(item, "strength", float, 0.0),
            occurrences=occurrences,
        ))

    return Poem(
        id=_require_str(data, "id"),
        title=_require_str(data, "title"),
        content=_require_str(data, "content"),
        imagery=imagery,
        word_associations=associations,
    )
