"""System checks for link tracking declarations."""

from django.apps import apps
from django.core import checks
from django.core.exceptions import FieldDoesNotExist


@checks.register(checks.Tags.models)
def check_html_fields(app_configs=None, **kwargs):
    """Every name in ``html_fields`` must be an HTMLTextField on the model."""
    from sitetree.models import HTMLTextField, LinkTrackingMixin

    if app_configs is None:
        models = apps.get_models()
    else:
        models = [model for config in app_configs for model in config.get_models()]

    errors = []
    for model in models:
        if not issubclass(model, LinkTrackingMixin):
            continue

        for name in model.get_html_fields():
            try:
                field = model._meta.get_field(name)
            except FieldDoesNotExist:
                errors.append(
                    checks.Error(
                        f"'{name}' is listed in html_fields but is not a field of {model.__name__}.",
                        obj=model,
                        id="sitetree.E001",
                    )
                )
                continue

            if not isinstance(field, HTMLTextField):
                errors.append(
                    checks.Error(
                        f"'{name}' is listed in html_fields but is not an HTMLTextField.",
                        hint="Declare the field as sitetree.models.HTMLTextField.",
                        obj=model,
                        id="sitetree.E002",
                    )
                )

    return errors
