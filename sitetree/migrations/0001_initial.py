import django.db.models.deletion
from django.db import migrations, models

import sitetree.models.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="File",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("title", models.CharField(help_text="Human-readable title", max_length=255)),
                (
                    "filename",
                    models.CharField(
                        help_text="Path of the file relative to the assets root (e.g., 'docs/report.pdf')",
                        max_length=255,
                    ),
                ),
                (
                    "file_type",
                    models.CharField(
                        choices=[("image", "Image"), ("document", "Document"), ("other", "Other")],
                        db_index=True,
                        default="other",
                        max_length=20,
                    ),
                ),
            ],
            options={
                "verbose_name": "File",
                "verbose_name_plural": "Files",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="SiteTree",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                (
                    "has_broken_link",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        editable=False,
                        help_text="Content contains a link to a missing page or anchor",
                    ),
                ),
                (
                    "has_broken_file",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        editable=False,
                        help_text="Content references a missing file or image",
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                (
                    "url_segment",
                    models.SlugField(
                        blank=True,
                        help_text="URL segment for this page. Leave blank to generate from the title.",
                        max_length=255,
                        unique=True,
                    ),
                ),
                ("content", sitetree.models.fields.HTMLTextField(blank=True)),
                ("summary", sitetree.models.fields.HTMLTextField(blank=True)),
                ("sort", models.PositiveIntegerField(default=0)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="sitetree.sitetree",
                    ),
                ),
            ],
            options={
                "verbose_name": "Page",
                "verbose_name_plural": "Pages",
                "ordering": ["sort", "title"],
            },
        ),
        migrations.CreateModel(
            name="Image",
            fields=[],
            options={
                "verbose_name": "Image",
                "verbose_name_plural": "Images",
                "proxy": True,
                "indexes": [],
                "constraints": [],
            },
            bases=("sitetree.file",),
        ),
        migrations.CreateModel(
            name="SiteTreeFileLink",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("field_name", models.CharField(db_index=True, max_length=100)),
                (
                    "file",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="page_links",
                        to="sitetree.file",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="file_links",
                        to="sitetree.sitetree",
                    ),
                ),
            ],
            options={
                "verbose_name": "File Link",
                "verbose_name_plural": "File Links",
                "indexes": [models.Index(fields=["owner", "field_name"], name="sitetree_flink_owner_field_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("owner", "file", "field_name"),
                        name="unique_sitetree_file_link_per_field",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SiteTreeLink",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("field_name", models.CharField(db_index=True, max_length=100)),
                (
                    "linked",
                    models.ForeignKey(
                        help_text="The page being linked to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="incoming_links",
                        to="sitetree.sitetree",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        help_text="The page that contains the link",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="outgoing_links",
                        to="sitetree.sitetree",
                    ),
                ),
            ],
            options={
                "verbose_name": "Page Link",
                "verbose_name_plural": "Page Links",
                "indexes": [models.Index(fields=["owner", "field_name"], name="sitetree_link_owner_field_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("owner", "linked", "field_name"),
                        name="unique_sitetree_link_per_field",
                    )
                ],
            },
        ),
        migrations.AddField(
            model_name="sitetree",
            name="image_tracking",
            field=models.ManyToManyField(
                blank=True,
                related_name="backlinked_pages",
                through="sitetree.SiteTreeFileLink",
                to="sitetree.file",
            ),
        ),
        migrations.AddField(
            model_name="sitetree",
            name="link_tracking",
            field=models.ManyToManyField(
                blank=True,
                related_name="back_link_tracking",
                symmetrical=False,
                through="sitetree.SiteTreeLink",
                through_fields=("owner", "linked"),
                to="sitetree.sitetree",
            ),
        ),
    ]
