import pytest
from django.db import IntegrityError

from sitetree.links.parser import LinkParser
from sitetree.links.tracker import LinkTracker
from sitetree.models import SiteTree, SiteTreeFileLink, SiteTreeLink
from sitetree.versioning import Stage

from fakes import FakeRepository

MISSING_ID = 99999


def page_edges(page, field_name="content"):
    return set(
        SiteTreeLink.objects.filter(owner=page, field_name=field_name).values_list("linked_id", flat=True)
    )


def file_edges(page, field_name="content"):
    return set(
        SiteTreeFileLink.objects.filter(owner=page, field_name=field_name).values_list("file_id", flat=True)
    )


class TestMarkupAnnotation:
    """Annotation runs on unsaved records, so no database is needed."""

    def tracker(self, **repo):
        return LinkTracker(LinkParser(FakeRepository(**repo)))

    def test_broken_link_gets_class(self):
        page = SiteTree(title="Home", content='<a href="[sitetree_link id=99]">x</a>')

        self.tracker().track_links_in_field(page, "content")

        assert page.content == '<a href="[sitetree_link id=99]" class="ss-broken">x</a>'
        assert page.has_broken_link is True

    def test_fixed_link_loses_class_and_keeps_others(self):
        page = SiteTree(
            title="Home",
            content='<a class="button ss-broken" href="[sitetree_link id=5]">x</a>',
        )

        self.tracker(pages={5: ""}).track_links_in_field(page, "content")

        assert page.content == '<a class="button" href="[sitetree_link id=5]">x</a>'

    def test_class_attribute_removed_when_empty(self):
        page = SiteTree(title="Home", content='<a class="ss-broken" href="[sitetree_link id=5]">x</a>')

        self.tracker(pages={5: ""}).track_links_in_field(page, "content")

        assert page.content == '<a href="[sitetree_link id=5]">x</a>'

    def test_broken_class_not_duplicated(self):
        page = SiteTree(title="Home", content='<a class="ss-broken" href="#gone">x</a>')

        self.tracker().track_links_in_field(page, "content")

        assert page.content == '<a class="ss-broken" href="#gone">x</a>'

    def test_untracked_links_left_alone(self):
        markup = '<p><a class="external" href="https://example.com">x</a></p>'
        page = SiteTree(title="Home", content=markup)

        links = self.tracker().track_links_in_field(page, "content")

        assert links == []
        assert page.content == markup

    def test_broken_class_is_configurable(self, settings):
        settings.LINK_TRACKING = {"BROKEN_LINK_CLASS": "is-broken"}
        page = SiteTree(title="Home", content='<a href="">x</a>')

        self.tracker().track_links_in_field(page, "content")

        assert page.content == '<a href="" class="is-broken">x</a>'

    def test_flags_by_kind(self):
        page = SiteTree(
            title="Home",
            content='<a href="[file_link id=8]">f</a><p>[image id="9"]</p>',
        )
        page.has_broken_link = False
        page.has_broken_file = False

        self.tracker().track_links_in_field(page, "content")

        assert page.has_broken_file is True
        assert page.has_broken_link is False

    def test_synchronize_skips_live_stage(self):
        markup = '<a href="[sitetree_link id=99]">x</a>'
        page = SiteTree(title="Home", content=markup, has_broken_file=True)

        self.tracker().synchronize(page, stage=Stage.LIVE)

        assert page.content == markup
        assert page.has_broken_file is True
        assert page.has_broken_link is False

    def test_named_entities_are_kept(self):
        markup = "<p>a&nbsp;b &copy; 2024 &amp; more</p>"
        page = SiteTree(title="Home", content=markup)

        self.tracker().track_links_in_field(page, "content")

        assert page.content == markup

    def test_synchronize_resets_flags_and_scans_all_fields(self):
        page = SiteTree(
            title="Home",
            content="<p>fine</p>",
            summary='<a href="#gone">x</a>',
            has_broken_file=True,
        )

        self.tracker().synchronize(page)

        assert page.has_broken_file is False
        assert page.has_broken_link is True
        assert 'class="ss-broken"' in page.summary


@pytest.mark.django_db
class TestLinkTracking:
    def test_broken_page_link_scenario(self, make_page):
        page = make_page(content=f'<a href="[sitetree_link id={MISSING_ID}]">x</a>')

        page.refresh_from_db()
        assert page.content == f'<a href="[sitetree_link id={MISSING_ID}]" class="ss-broken">x</a>'
        assert page.has_broken_link is True
        assert page_edges(page) == set()

    def test_repaired_page_link_scenario(self, make_page):
        target = make_page(title="Target")
        page = make_page(content=f'<a href="[sitetree_link id={MISSING_ID}]">x</a>')

        page.content = f'<a href="[sitetree_link id={target.pk}]" class="ss-broken">x</a>'
        page.save()

        page.refresh_from_db()
        assert page.content == f'<a href="[sitetree_link id={target.pk}]">x</a>'
        assert page.has_broken_link is False
        assert page_edges(page) == {target.pk}
        assert SiteTreeLink.objects.filter(owner=page).count() == 1

    def test_new_page_gets_edges_on_first_save(self, make_page, make_file):
        target = make_page(title="Target")
        doc = make_file(title="Doc")
        page = make_page(
            content=f'<a href="[sitetree_link id={target.pk}]">t</a><a href="[file_link id={doc.pk}]">d</a>'
        )

        assert page_edges(page) == {target.pk}
        assert file_edges(page) == {doc.pk}
        assert list(page.link_tracking.all()) == [target]
        assert list(target.back_link_tracking.all()) == [page]
        assert list(page.image_tracking.all()) == [doc]

    def test_files_and_images_share_file_edges(self, make_page, make_file):
        from sitetree.models import File

        doc = make_file(title="Doc")
        photo = make_file(title="Photo", file_type=File.FileType.IMAGE)
        page = make_page(
            content=(
                f'<a href="[file_link id={doc.pk}]">d</a>'
                f'<a href="[file_link id={photo.pk}]">p</a>'
                f'<p>[image id="{photo.pk}"]</p>'
            )
        )

        assert file_edges(page) == {doc.pk, photo.pk}
        assert SiteTreeFileLink.objects.filter(owner=page).count() == 2
        assert page.has_broken_file is False

    def test_image_shortcode_to_non_image_file_is_broken(self, make_page, make_file):
        doc = make_file(title="Doc")
        page = make_page(content=f'<p>[image id="{doc.pk}"]</p>')

        assert page.has_broken_file is True
        assert file_edges(page) == set()

    def test_duplicate_links_make_one_edge(self, make_page):
        target = make_page(title="Target")
        page = make_page(
            content=(
                f'<a href="[sitetree_link id={target.pk}]">one</a>'
                f'<a href="[sitetree_link id={target.pk}]#top">two</a>'
            ),
        )
        target.content = '<a name="top"></a>'
        target.save()
        page.save()

        assert SiteTreeLink.objects.filter(owner=page).count() == 1
        assert page.has_broken_link is False

    def test_reconcile_is_scoped_by_field(self, make_page):
        a = make_page(title="A")
        b = make_page(title="B")
        c = make_page(title="C")
        page = make_page(
            content=f'<a href="[sitetree_link id={a.pk}]">a</a>',
            summary=f'<a href="[sitetree_link id={b.pk}]">b</a>',
        )
        assert page_edges(page, "content") == {a.pk}
        assert page_edges(page, "summary") == {b.pk}

        page.content = f'<a href="[sitetree_link id={c.pk}]">c</a>'
        LinkTracker().track_links_in_field(page, "content")

        assert page_edges(page, "content") == {c.pk}
        assert page_edges(page, "summary") == {b.pk}

    def test_same_target_in_two_fields(self, make_page):
        target = make_page(title="Target")
        link = f'<a href="[sitetree_link id={target.pk}]">t</a>'
        page = make_page(content=link, summary=link)

        assert SiteTreeLink.objects.filter(owner=page, linked=target).count() == 2

    def test_track_links_is_idempotent(self, make_page):
        target = make_page(title="Target")
        page = make_page(
            content=(
                f'<a href="[sitetree_link id={target.pk}]">ok</a>'
                f'<a href="[sitetree_link id={MISSING_ID}]">gone</a>'
                '<a href="#nowhere">local</a>'
            )
        )
        tracker = LinkTracker()

        tracker.synchronize(page)
        first = (page.content, page.has_broken_link, page.has_broken_file, page_edges(page))
        tracker.synchronize(page)
        second = (page.content, page.has_broken_link, page.has_broken_file, page_edges(page))

        assert first == second
        assert first[3] == {target.pk}

    def test_unsaved_record_gets_no_edges(self, make_page):
        target = make_page(title="Target")
        page = SiteTree(title="Draft", content=f'<a href="[sitetree_link id={target.pk}]">t</a>')

        LinkTracker().synchronize(page)

        assert page.has_broken_link is False
        assert SiteTreeLink.objects.count() == 0

    def test_live_save_does_not_touch_tracking(self, make_page):
        page = make_page(title="Page")
        page.content = f'<a href="[sitetree_link id={MISSING_ID}]">x</a>'

        page.save(stage=Stage.LIVE)

        page.refresh_from_db()
        assert page.has_broken_link is False
        assert "ss-broken" not in page.content

    def test_local_anchor_counts_as_broken_link(self, make_page):
        page = make_page(content='<a href="#missing">x</a><h2 id="present">P</h2><a href="#present">y</a>')

        assert page.has_broken_link is True
        assert page.content.count("ss-broken") == 1
        assert SiteTreeLink.objects.filter(owner=page).count() == 0

    def test_removing_links_clears_edges(self, make_page, make_file):
        target = make_page(title="Target")
        doc = make_file(title="Doc")
        page = make_page(
            content=f'<a href="[sitetree_link id={target.pk}]">t</a><a href="[file_link id={doc.pk}]">d</a>'
        )

        page.content = "<p>No more links</p>"
        page.save()

        assert page_edges(page) == set()
        assert file_edges(page) == set()

    def test_save_without_html_fields_keeps_tracking(self, make_page):
        target = make_page(title="Target")
        page = make_page(content=f'<a href="[sitetree_link id={target.pk}]">t</a>')

        page.title = "Renamed"
        page.content = f'<a href="[sitetree_link id={MISSING_ID}]">x</a>'
        page.save(update_fields=["title"])

        page.refresh_from_db()
        assert page.title == "Renamed"
        assert page.content == f'<a href="[sitetree_link id={target.pk}]">t</a>'
        assert page.has_broken_link is False
        assert page_edges(page) == {target.pk}

    def test_save_with_html_field_writes_markup_and_flags(self, make_page):
        target = make_page(title="Target")
        page = make_page(content=f'<a href="[sitetree_link id={target.pk}]">t</a>')

        page.content = f'<a href="[sitetree_link id={MISSING_ID}]">x</a>'
        page.save(update_fields=["content"])

        page.refresh_from_db()
        assert page.content == f'<a href="[sitetree_link id={MISSING_ID}]" class="ss-broken">x</a>'
        assert page.has_broken_link is True
        assert page_edges(page) == set()

    def test_failed_save_leaves_edges_untouched(self, make_page):
        target = make_page(title="Target")
        make_page(title="Taken", url_segment="taken")
        page = make_page(content=f'<a href="[sitetree_link id={target.pk}]">t</a>')

        page.url_segment = "taken"
        page.content = "<p>No more links</p>"
        with pytest.raises(IntegrityError):
            page.save()

        assert page_edges(page) == {target.pk}
