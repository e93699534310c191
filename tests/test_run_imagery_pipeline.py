"""
End-to-end tests for the imagery pipeline orchestrator
"""

import json

import pytest

import global_stats
import poem_parser
import word_associations
from run_imagery_pipeline import PipelineFlags, main, run_imagery_pipeline

CORPUS = """唐诗选
1.静夜思
床前明月光，疑是地上霜。
举头望明月，低头思故乡。
2.山居秋暝
空山新雨后，天气晚来秋。
明月松间照，清泉石上流。
3.鹿柴
空山不见人，但闻人语响。
返景入深林，复照青苔上。
"""


@pytest.fixture
def data_dirs(tmp_path, monkeypatch):
    monkeypatch.setattr(poem_parser, "RAW_CORPUS_DIR", str(tmp_path / "raw"))
    monkeypatch.setattr(poem_parser, "POEMS_DIR", str(tmp_path / "poems"))
    monkeypatch.setattr(word_associations, "IMAGERY_ASSOCIATIONS_DIR", str(tmp_path / "associations"))
    monkeypatch.setattr(global_stats, "IMAGERY_STATS_DIR", str(tmp_path / "stats"))
    (tmp_path / "raw").mkdir()
    return tmp_path


def _write_corpus(data_dirs, name, text):
    path = data_dirs / "raw" / f"{name}.txt"
    path.write_text(text, encoding="utf-8")
    return path


class TestRunPipeline:

    def test_all_artifacts_written(self, data_dirs):
        _write_corpus(data_dirs, "唐诗", CORPUS)

        result = run_imagery_pipeline("唐诗")

        assert result.total_poems == 3
        for path in (result.poems_path, result.associations_path, result.stats_path):
            assert path is not None

        with open(result.stats_path, encoding="utf-8") as f:
            artifact = json.load(f)
        assert artifact["run_id"] == result.run_id
        assert artifact["total_poems"] == 3
        node_names = {n["name"] for n in artifact["stats"]["co_occurrence_network"]["nodes"]}
        assert {"月", "山", "霜"} <= node_names

    def test_explicit_source_and_skip_flags(self, data_dirs):
        source = data_dirs / "elsewhere.txt"
        source.write_text(CORPUS, encoding="utf-8")

        result = run_imagery_pipeline(
            "唐诗",
            PipelineFlags(source_path=str(source), skip_associations=True, skip_stats=True),
        )

        assert result.poems_path is not None
        assert result.associations_path is None
        assert result.stats_path is None

    def test_saved_poems_can_be_reloaded(self, data_dirs):
        _write_corpus(data_dirs, "唐诗", CORPUS)
        result = run_imagery_pipeline("唐诗", PipelineFlags(skip_stats=True))

        poems, run_id = poem_parser.load_poems("唐诗", result.run_id)
        assert run_id == result.run_id
        assert [p.title for p in poems] == ["静夜思", "山居秋暝", "鹿柴"]

    def test_unformatted_corpus_rejected(self, data_dirs):
        _write_corpus(data_dirs, "散文", "床前明月光\n疑是地上霜\n")
        with pytest.raises(ValueError):
            run_imagery_pipeline("散文")


class TestCommandLine:

    def test_success_exit_code(self, data_dirs):
        _write_corpus(data_dirs, "唐诗", CORPUS)
        assert main(["唐诗"]) == 0

    def test_missing_corpus_exit_code(self, data_dirs):
        assert main(["不存在"]) == 1

    def test_unformatted_corpus_exit_code(self, data_dirs):
        _write_corpus(data_dirs, "散文", "床前明月光\n")
        assert main(["散文"]) == 1
