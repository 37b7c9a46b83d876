"""Tests for search root strategies."""

from sitepartials.directives.cache import PartialCache
from sitepartials.directives.strategies import DocumentDirectoryStrategy, IncludeRootsStrategy
from sitepartials.runtime.render_pass import RenderPass
from sitepartials.runtime.site import Document, Site
from sitepartials.settings.store import SiteConfig


def test_include_roots_in_configured_order(tmp_path, fake_compiler):
    site = Site(SiteConfig(
        source=tmp_path,
        includes_dirs=["_includes", "_shared"],
        extra_include_paths=[tmp_path / "theme" / "_includes"],
    ))
    strategy = IncludeRootsStrategy()

    roots = strategy.candidate_roots(RenderPass(site=site, cache=PartialCache(fake_compiler)))

    assert roots == [
        tmp_path / "_includes",
        tmp_path / "_shared",
        tmp_path / "theme" / "_includes",
    ]
    assert strategy.get_strategy_name() == "include-roots"


def test_standalone_page_uses_its_own_directory(site, make_pass):
    render_pass = make_pass(Document(relative_path="about/team.md"))

    assert DocumentDirectoryStrategy().candidate_roots(render_pass) == [site.source / "about"]


def test_top_level_page_uses_source(site, make_pass):
    render_pass = make_pass(Document(relative_path="index.md"))

    assert DocumentDirectoryStrategy().candidate_roots(render_pass) == [site.source]


def test_collection_document_joins_container(site, make_pass):
    render_pass = make_pass(Document(relative_path="posts/a.md", collection="posts"))

    assert DocumentDirectoryStrategy().candidate_roots(render_pass) == [
        site.source / "_posts" / "posts"
    ]


def test_excerpt_marker_is_stripped(site, make_pass):
    document = Document(relative_path="posts/a.md", collection="posts").excerpt("\n\n")
    assert document.relative_path == "posts/a.md/#excerpt"

    render_pass = make_pass(document)

    assert DocumentDirectoryStrategy().candidate_roots(render_pass) == [
        site.source / "_posts" / "posts"
    ]


def test_collection_without_container_dir(tmp_path, make_pass):
    site = Site(SiteConfig(source=tmp_path))
    render_pass = make_pass(Document(relative_path="_docs/guide/intro.md", collection="docs"))
    render_pass.site = site

    assert DocumentDirectoryStrategy().candidate_roots(render_pass) == [
        tmp_path / "_docs" / "guide"
    ]


def test_no_document_falls_back_to_source(site, make_pass):
    assert DocumentDirectoryStrategy().candidate_roots(make_pass()) == [site.source]
