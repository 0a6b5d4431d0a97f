from datetime import datetime

import pytest

from ytt.core import output as output_utils
from ytt.core.exceptions import ConfigurationError, OutputError

NOW = datetime(2024, 7, 15, 9, 5, 3)


def test_filename_suffix_timestamp_only():
    assert output_utils.filename_suffix(now=NOW) == "2024-07-15-090503"


def test_filename_suffix_with_user_suffix():
    assert (
        output_utils.filename_suffix("ep12", now=NOW)
        == "2024-07-15-090503_ep12"
    )


def test_artifact_paths(tmp_path):
    assert (
        output_utils.raw_transcript_path(tmp_path, "S")
        == tmp_path / "raw_transcript_S.txt"
    )
    assert (
        output_utils.cleaned_transcript_path(tmp_path, "S")
        == tmp_path / "cleaned_transcript_S.txt"
    )


def test_check_output_dir(tmp_path):
    assert output_utils.check_output_dir(tmp_path) == tmp_path

    with pytest.raises(ConfigurationError, match="path not found"):
        output_utils.check_output_dir(tmp_path / "nope")

    a_file = tmp_path / "file.txt"
    a_file.write_text("x")
    with pytest.raises(ConfigurationError):
        output_utils.check_output_dir(a_file)


def test_save_text_writes_utf8(tmp_path):
    path = tmp_path / "nested" / "out.txt"

    result = output_utils.save_text(path, "Café, naïve résumé\n")

    assert result == path
    assert path.read_bytes() == "Café, naïve résumé\n".encode("utf-8")


def test_check_output_file(tmp_path):
    output_utils.check_output_file(None)
    output_utils.check_output_file(str(tmp_path / "clean.txt"))

    with pytest.raises(ConfigurationError, match="output path is a directory"):
        output_utils.check_output_file(str(tmp_path))


def test_save_text_onto_directory_is_an_output_error(tmp_path):
    with pytest.raises(OutputError, match="failed to write") as excinfo:
        output_utils.save_text(tmp_path, "text")

    assert isinstance(excinfo.value.__cause__, OSError)


def test_save_text_parent_is_a_file(tmp_path):
    a_file = tmp_path / "file.txt"
    a_file.write_text("x")

    with pytest.raises(OutputError, match="failed to write"):
        output_utils.save_text(a_file / "out.txt", "text")
