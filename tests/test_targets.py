import pytest

from downpour.errors import ConfigurationError, MissingTarget, ResolutionError
from downpour.targets import read_url_file, resolve_targets


def test_file_takes_precedence(tmp_path):
    f = tmp_path / "urls.txt"
    f.write_text("http://a/\nhttp://b/\n")
    assert resolve_targets(str(f), "http://explicit/", ["http://positional/"]) == [
        "http://a/",
        "http://b/",
    ]


def test_explicit_url_before_positional():
    assert resolve_targets(None, "http://explicit/", ["http://positional/"]) == ["http://explicit/"]


def test_first_positional_argument_is_used():
    assert resolve_targets(None, None, ["http://one/", "http://two/"]) == ["http://one/"]


def test_missing_target():
    with pytest.raises(MissingTarget):
        resolve_targets(None, None, [])
    assert issubclass(MissingTarget, ConfigurationError)


def test_file_lines_keep_order_duplicates_and_blanks(tmp_path):
    f = tmp_path / "urls.txt"
    f.write_bytes(b"http://a/\r\nhttp://b/\n\nhttp://a/")
    assert read_url_file(str(f)) == ["http://a/", "http://b/", "", "http://a/"]


def test_missing_file(tmp_path):
    with pytest.raises(ResolutionError):
        resolve_targets(str(tmp_path / "nope.txt"))


def test_empty_file(tmp_path):
    f = tmp_path / "empty.txt"
    f.write_text("")
    with pytest.raises(ResolutionError):
        read_url_file(str(f))
