import re

from text_utils import new_run_id, split_clauses, split_lines, split_sentences, unique_characters


def test_split_lines_drops_blank_lines():
    assert split_lines("甲\n\n  \n乙\r\n") == ["甲", "乙"]


def test_sentences_and_clauses_use_different_delimiters():
    text = "明月松间照，清泉石上流。竹喧归浣女"
    assert split_sentences(text) == ["明月松间照，清泉石上流", "竹喧归浣女"]
    assert split_clauses(text) == ["明月松间照", "清泉石上流", "竹喧归浣女"]


def test_clauses_split_on_whitespace():
    assert split_clauses("白日 依山尽；黄河：入海流") == ["白日", "依山尽", "黄河", "入海流"]


def test_unique_characters_keep_first_seen_order():
    assert unique_characters("明月明") == ["明", "月"]


def test_run_id_format():
    assert re.fullmatch(r"run_\d{8}_\d{6}_[0-9a-f]{8}", new_run_id())
