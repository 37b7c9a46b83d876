"""Tests for search-path resolution."""

import os

import pytest

from sitepartials.directives.exceptions import IncludeNotFoundError
from sitepartials.directives.resolver import join_reference, locate_include_file


@pytest.fixture
def roots(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    return first, second


def test_file_only_in_second_root(roots):
    first, second = roots
    (second / "nav.html").write_text("b")

    assert locate_include_file("nav.html", [first, second]) == second / "nav.html"


def test_first_root_wins_when_both_have_file(roots):
    first, second = roots
    (first / "nav.html").write_text("a")
    (second / "nav.html").write_text("b")

    assert locate_include_file("nav.html", [first, second]) == first / "nav.html"
    assert locate_include_file("nav.html", [second, first]) == second / "nav.html"


def test_nested_reference(roots):
    first, _ = roots
    (first / "cards").mkdir()
    (first / "cards" / "post.html").write_text("card")

    assert locate_include_file("cards/post.html", [first]) == first / "cards" / "post.html"


def test_directories_are_not_matches(roots):
    first, second = roots
    (first / "nav.html").mkdir()
    (second / "nav.html").write_text("b")

    assert locate_include_file("nav.html", [first, second]) == second / "nav.html"


def test_symlinked_file_counts(roots):
    first, second = roots
    target = second / "real.html"
    target.write_text("real")
    os.symlink(target, first / "link.html")

    assert locate_include_file("link.html", [first]) == first / "link.html"


def test_dangling_symlink_is_skipped(roots):
    first, second = roots
    os.symlink(first / "missing.html", first / "dangling.html")
    (second / "dangling.html").write_text("b")

    assert locate_include_file("dangling.html", [first, second]) == second / "dangling.html"


def test_missing_everywhere_lists_roots(roots):
    first, second = roots

    with pytest.raises(IncludeNotFoundError) as exc_info:
        locate_include_file("nav.html", [first, second])

    error = exc_info.value
    assert error.reference == "nav.html"
    assert error.roots == [str(first), str(second)]
    assert "nav.html" in str(error)
    assert str(first) in str(error) and str(second) in str(error)


def test_no_roots_is_not_found():
    with pytest.raises(IncludeNotFoundError):
        locate_include_file("nav.html", [])


def test_leading_slash_stays_under_root(tmp_path):
    assert join_reference(tmp_path, "/nav.html") == tmp_path / "nav.html"
    assert join_reference(str(tmp_path), "x/y.html") == tmp_path / "x" / "y.html"
