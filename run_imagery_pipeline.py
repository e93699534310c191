"""
Poem Imagery Pipeline Orchestrator

This orchestrator runs the imagery analysis stages over one corpus file
and writes every artifact under data/.

============================================================
EXECUTION ORDER
============================================================

1. Initialize run context (run_id)
2. Load corpus text (data/raw/{corpus_name}.txt or --source)
3. Parse poems (imagery counts are extracted per poem)
4. Save parsed poems
5. [Optional] Imagery-word associations (unless --skip-associations)
   - saved as an artifact
   - attached to each poem for the imagery-word network
6. [Optional] Global statistics (unless --skip-stats)
7. Print summary

============================================================
INPUT FORMAT
============================================================

Plain UTF-8 text, one poem per heading:

    1.静夜思
    床前明月光
    疑是地上霜
    2.春晓
    春眠不觉晓

Text without any numbered heading is rejected as not poem-formatted.

============================================================
CLI USAGE
============================================================

# Full analysis of data/raw/唐诗.txt
python run_imagery_pipeline.py "唐诗"

# Explicit source file
python run_imagery_pipeline.py "唐诗" --source path/to/poems.txt

# Parse and aggregate without the association pass
python run_imagery_pipeline.py "唐诗" --skip-associations
"""

import argparse
import sys
from dataclasses import dataclass
from typing import Optional

from dict.imagery_dictionary import IMAGERY_DICTIONARY_VERSION, NATURAL_IMAGERY
from global_stats import generate_global_stats
from poem_parser import load_corpus_text, parse_poems, save_poems
from text_utils import new_run_id
from word_associations import generate_word_associations


# --------------------------------------------------
# Pipeline Flags Data Structure
# --------------------------------------------------

@dataclass
class PipelineFlags:
    """
    Flags controlling which stages run.

    Parsing always runs; the later stages run unless skipped.
    """
    source_path: Optional[str] = None
    skip_associations: bool = False
    skip_stats: bool = False


@dataclass
class PipelineResult:
    run_id: str
    total_poems: int
    poems_path: Optional[str] = None
    associations_path: Optional[str] = None
    stats_path: Optional[str] = None


# --------------------------------------------------
# Pipeline Execution
# --------------------------------------------------

def run_imagery_pipeline(
    corpus_name: str,
    flags: Optional[PipelineFlags] = None,
) -> PipelineResult:
    """
    Run the imagery pipeline over one corpus.

    Raises:
        FileNotFoundError: If the corpus file does not exist
        ValueError: If the corpus holds no recognisable poems
    """
    if flags is None:
        flags = PipelineFlags()

    run_id = new_run_id()
    print(f"=== Starting IMAGERY pipeline for corpus: {corpus_name} ===")
    print(f"Run ID: {run_id}")
    print(f"Lexicon: v{IMAGERY_DICTIONARY_VERSION} ({len(NATURAL_IMAGERY)} terms)")

    # --------------------------------------------------
    # Parsing
    # --------------------------------------------------
    print("\n" + "=" * 50)
    print("[Pipeline] Poem Parsing")
    print("=" * 50)

    text = load_corpus_text(corpus_name, flags.source_path)
    if not text.strip():
        raise ValueError(f"Corpus is empty: {corpus_name}")

    poems = parse_poems(text)
    if not poems:
        raise ValueError(
            f"No poems recognised in corpus: {corpus_name}\n"
            "Expected numbered headings such as '1.静夜思' on their own line"
        )

    poems_path = save_poems(poems, corpus_name, run_id)
    with_imagery = sum(1 for poem in poems if poem.imagery)
    print(f"[Poem Parser] Parsed {len(poems)} poems ({with_imagery} with imagery)")
    print(f"[Poem Parser] Saved to: {poems_path}")

    result = PipelineResult(run_id=run_id, total_poems=len(poems), poems_path=poems_path)

    # --------------------------------------------------
    # Imagery-Word Associations
    # --------------------------------------------------
    if not flags.skip_associations:
        print("\n" + "=" * 50)
        print("[Pipeline] Imagery-Word Associations")
        print("=" * 50)
        generated = generate_word_associations(poems, corpus_name, run_id)
        if generated is not None:
            poems, result.associations_path = generated

    # --------------------------------------------------
    # Global Statistics
    # --------------------------------------------------
    if not flags.skip_stats:
        print("\n" + "=" * 50)
        print("[Pipeline] Global Statistics")
        print("=" * 50)
        result.stats_path = generate_global_stats(poems, corpus_name, run_id)

    print("\n" + "=" * 50)
    print(f"[Pipeline] Complete: {corpus_name}")
    print("=" * 50)

    return result


# --------------------------------------------------
# Command-Line Interface
# --------------------------------------------------

def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Usage:
        python run_imagery_pipeline.py <corpus_name> [options]
    """
    parser = argparse.ArgumentParser(
        description="Poem Imagery Pipeline - imagery extraction and corpus statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "唐诗"                               # data/raw/唐诗.txt
  %(prog)s "唐诗" --source poems.txt            # explicit source file
  %(prog)s "唐诗" --skip-associations           # no association pass
        """,
    )

    parser.add_argument(
        "corpus_name",
        help="Name of the corpus (data/raw/<corpus_name>.txt unless --source is given)",
    )
    parser.add_argument(
        "--source",
        dest="source_path",
        help="Path to a UTF-8 text file to analyse instead of data/raw/<corpus_name>.txt",
    )

    stage_group = parser.add_argument_group("Stages (skip flags)")
    stage_group.add_argument(
        "--skip-associations",
        action="store_true",
        help="Skip the corpus-wide imagery-word association pass",
    )
    stage_group.add_argument(
        "--skip-stats",
        action="store_true",
        help="Skip global statistics aggregation",
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    flags = PipelineFlags(
        source_path=args.source_path,
        skip_associations=args.skip_associations,
        skip_stats=args.skip_stats,
    )

    try:
        result = run_imagery_pipeline(args.corpus_name, flags)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n✗ Imagery pipeline failed: {e}")
        return 1

    print(f"\n✓ Imagery pipeline finished: {result.total_poems} poems (run {result.run_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
