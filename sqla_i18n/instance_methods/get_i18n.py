# File: sqla_i18n/instance_methods/get_i18n.py
# Projects one language's translation row onto the base instance.
# Reads only rows already loaded in memory; never emits SQL.

from sqlalchemy.orm.attributes import instance_dict

from ..models.localized import project


def loaded_translations(instance, relationship_key):
    """Translation rows already loaded on the instance, or None when the collection is unloaded."""
    return instance_dict(instance).get(relationship_key)


def _row_values(row, localized_fields):
    # Unloaded or deferred columns are skipped rather than fetched
    row_dict = instance_dict(row)
    return {field: row_dict[field] for field in localized_fields if field in row_dict}


def _find(rows, language_id):
    for row in rows:
        if instance_dict(row).get("language_id") == language_id:
            return row
    return None


def make_getter(registry, association):
    localized_fields = association.localized_fields
    relationship_key = association.relationship_key

    def get_i18n(self, lang, default_language_fallback=None):
        """
        Copy the `lang` translation onto this instance's localized fields and return self.

        Without a `lang` row, falls back to the default language row when fallback is
        enabled (registry setting unless overridden) and a default language exists.
        """
        if default_language_fallback is None:
            default_language_fallback = registry.default_language_fallback

        rows = loaded_translations(self, relationship_key)
        if not rows:
            return self

        row = _find(rows, lang)
        if row is None:
            if registry.default_language is None or not default_language_fallback:
                return self
            row = _find(rows, registry.default_language)
            if row is None:
                return self

        project(self, _row_values(row, localized_fields))
        return self

    return get_i18n
