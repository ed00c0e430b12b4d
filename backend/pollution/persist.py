"""
Write helpers shared by the station and reading stores.

Foreign keys are created DEFERRABLE INITIALLY DEFERRED by Django, so a
dangling reference would only fail at commit. Each write runs in its own
savepoint and forces the check right away, which turns the violation into a
constraint Result and rolls the row back.
"""

from django.core.exceptions import NON_FIELD_ERRORS
from django.db import IntegrityError, connection, transaction

from .results import Result


def _write(instance, fk_field, **save_kwargs) -> Result:
    # errors from the row itself are not tied to one field; only the
    # deferred foreign key check is reported under fk_field
    error_field = NON_FIELD_ERRORS
    try:
        with transaction.atomic():
            instance.save(**save_kwargs)
            error_field = fk_field
            connection.check_constraints(table_names=[instance._meta.db_table])
    except IntegrityError as exc:
        return Result.constraint_failure({error_field: [str(exc)]})
    return Result.success(instance)


def insert(instance, fk_field=NON_FIELD_ERRORS) -> Result:
    return _write(instance, fk_field, force_insert=True)


def update(instance, fields, fk_field=NON_FIELD_ERRORS) -> Result:
    return _write(instance, fk_field, update_fields=list(fields))
