"""Shared fixtures: a temporary site tree and fake host engine pieces."""

from pathlib import Path
from typing import Any, Dict

import pytest

from sitepartials.directives.cache import PartialCache
from sitepartials.rendering.renderer import SiteRenderer
from sitepartials.runtime.render_pass import RenderPass
from sitepartials.runtime.scope import LayeredScope
from sitepartials.runtime.site import Document, Site
from sitepartials.settings.store import SiteConfig

from .helpers import FakeCompiler, FakeRunner, write


@pytest.fixture
def site_root(tmp_path) -> Path:
    """Source tree with include roots and a collection."""
    source = tmp_path / "src"
    write(source / "_includes" / "nav.html", "<nav>{{ include.title }}</nav>")
    write(source / "_includes" / "item.html", "[{{ include.name }}]")
    write(source / "_includes" / "outer.html", "outer:{% include_file inner.html %}")
    write(source / "_includes" / "inner.html", "inner:{{ include.label }}")
    write(source / "_includes" / "broken.html", "x{{ nope.deeper }}y")
    write(source / "_includes" / "wrapper.html", "w({% include_file broken.html %})")
    write(source / "_posts" / "posts" / "snippet.html", "snippet for {{ page.title }}")
    write(source / "about" / "team.html", "team partial")
    return source


@pytest.fixture
def site(site_root) -> Site:
    return Site(SiteConfig(source=site_root, collections_dir="_posts"))


@pytest.fixture
def renderer(site) -> SiteRenderer:
    return SiteRenderer(site)


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_pass(site, fake_compiler):
    """Build a RenderPass over the fake compiler for an optional document."""

    def _make(document: Document = None, variables: Dict[str, Any] = None) -> RenderPass:
        return RenderPass(
            site=site,
            cache=PartialCache(fake_compiler),
            document=document,
            scope=LayeredScope(variables),
        )

    return _make
