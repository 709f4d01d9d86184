from __future__ import annotations

import pytest

from llm_unify.base.utils.parsers import clean_json_markers, code_block, json_parser, markdown, xml


def test_json_parser_plain_and_fenced():
    assert json_parser('{"a": 1}') == {"a": 1}  # nosec B101 - pytest assert in tests
    assert json_parser('Here:\n```json\n{"b": [1, 2]}\n```\nthanks') == {"b": [1, 2]}  # nosec B101
    assert json_parser('```\n[1]\n```') == [1]  # nosec B101 - pytest assert in tests


def test_json_parser_rejects_prose():
    with pytest.raises(ValueError):
        json_parser("the sky is blue")


def test_clean_json_markers():
    assert clean_json_markers('```json\n{"x": 1}\n```') == '{"x": 1}'  # nosec B101


def test_code_block_extracts_first_block():
    parse = code_block("python")
    assert parse("text\n```python\nprint(1)\n```\nmore") == "print(1)"  # nosec B101
    with pytest.raises(ValueError):
        parse("no code here")


def test_code_block_requires_exact_language_tag():
    with pytest.raises(ValueError):
        code_block("md")("```mdx\nbody\n```")


def test_markdown_accepts_md_alias():
    assert markdown("```md\n# Title\n```") == "# Title"  # nosec B101 - pytest assert in tests
    assert markdown("```markdown\n- item\n```") == "- item"  # nosec B101 - pytest assert in tests


def test_xml_tag_extraction():
    parse = xml("answer")
    assert parse("<think>hmm</think><answer> blue </answer>") == "blue"  # nosec B101
    with pytest.raises(ValueError):
        parse("<answer></answer>")
    with pytest.raises(ValueError):
        parse("no tags")
