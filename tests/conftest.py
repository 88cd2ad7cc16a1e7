"""Shared fixtures for link tracking tests."""

import pytest

from fakes import FakeRepository
from sitetree.links.parser import LinkParser


@pytest.fixture
def repository():
    return FakeRepository(
        pages={
            42: '<h2 id="section">Section</h2><p><a name="legacy"></a>Body</p>',
            5: "<p>Five</p>",
        },
        files={7},
        images={3},
    )


@pytest.fixture
def parser(repository):
    return LinkParser(repository)


@pytest.fixture
def make_page(db):
    from sitetree.models import SiteTree

    def _make_page(title="Page", **kwargs):
        return SiteTree.objects.create(title=title, **kwargs)

    return _make_page


@pytest.fixture
def make_file(db):
    from sitetree.models import File

    def _make_file(title="Report", file_type=File.FileType.DOCUMENT, **kwargs):
        kwargs.setdefault("filename", f"assets/{title.lower()}.pdf")
        return File.objects.create(title=title, file_type=file_type, **kwargs)

    return _make_file
