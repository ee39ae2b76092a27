"""Tests for the paper-wizard command line."""

from pathlib import Path

import pytest

from wizard.cli import _question_config, create_parser, main


def test_generate_defaults():
    args = create_parser().parse_args(
        ["generate", "notes.pdf", "--subject", "Operating Systems", "--branch", "CE"]
    )

    assert args.pdfs == [Path("notes.pdf")]
    assert args.server == "http://localhost:3001"
    config = _question_config(args)
    assert (config.mcq.count, config.mcq.marks_per_question, config.mcq.options_count) == (10, 1, 4)
    assert (config.short_answer.count, config.short_answer.word_limit) == (6, 150)
    assert (config.long_answer.count, config.long_answer.marks_per_question) == (4, 15)
    assert not config.additional.case_study


def test_generate_custom_config():
    args = create_parser().parse_args([
        "generate", "a.pdf", "b.pdf", "--subject", "DBMS", "--branch", "IT",
        "--mcq", "0", "--mcq-options", "5", "--long-words", "800", "--diagram",
    ])

    config = _question_config(args)
    assert config.mcq.count == 0
    assert config.mcq.options_count == 5
    assert config.long_answer.word_limit == 800
    assert config.additional.diagram_based


def test_generate_requires_subject_and_branch():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["generate", "notes.pdf"])


def test_missing_pdf_fails_before_any_request(tmp_path, capsys):
    code = main([
        "generate", str(tmp_path / "missing.pdf"), "--subject", "OS", "--branch", "CE",
        "--server", "http://127.0.0.1:9",
    ])

    assert code == 1
    assert "missing.pdf" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "paper-wizard" in capsys.readouterr().out


@pytest.mark.parametrize(
    "flags",
    [
        ["--mcq", "-1"],
        ["--long", "-3"],
        ["--short-marks", "0"],
        ["--long-words", "0"],
        ["--total-marks", "-10"],
        ["--mcq", "many"],
    ],
)
def test_out_of_range_numbers_are_usage_errors(flags, capsys):
    with pytest.raises(SystemExit) as exc_info:
        create_parser().parse_args(["generate", "notes.pdf", "--subject", "OS", "--branch", "CE", *flags])

    assert exc_info.value.code == 2
    assert "paper-wizard generate" in capsys.readouterr().err


def test_zero_count_is_allowed():
    args = create_parser().parse_args(
        ["generate", "notes.pdf", "--subject", "OS", "--branch", "CE", "--mcq", "0", "--long", "0"]
    )

    config = _question_config(args)
    assert config.mcq.count == 0
    assert config.long_answer.count == 0
