"""Mapping validation against a required-field catalog.

Checks a field→column mapping, either produced by reconcile() or edited by
a user, and reports every problem found in a single pass:
- MissingMapping (error): a required field has no column
- InvalidMapping (error): the column is not in the current sheet
- DuplicateMapping (warning): a column is shared by several fields
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from app.core.models import (
    BusinessField,
    DuplicateMapping,
    InvalidMapping,
    MissingMapping,
    ValidationReport,
)


def validate_mapping(
    fields: Sequence[BusinessField],
    mapping: Mapping[str, str | None],
    columns: Sequence[str],
) -> ValidationReport:
    """Validate a mapping against the required fields and current columns.

    Args:
        fields: Required field catalog
        mapping: Field key to column header; None or "" counts as unmapped
        columns: Header strings of the current sheet

    Returns:
        ValidationReport with all issues; duplicates are warnings and do not
        affect is_valid
    """
    report = ValidationReport(total_required=len(fields))
    known_columns = set(columns)

    for field in fields:
        column = mapping.get(field.key)

        if not column:
            report.missing_fields.append(field.key)
            report.issues.append(MissingMapping(
                field_key=field.key,
                message=f"Missing mapping for: {field.label}",
            ))
        elif column not in known_columns:
            report.invalid_fields.append(field.key)
            report.issues.append(InvalidMapping(
                field_key=field.key,
                column=column,
                message=f'Invalid column selected for {field.label}: "{column}" not found in Excel file',
            ))
        else:
            report.valid_fields.append(field.key)

    # Group every mapped key (catalog or not) by column, in mapping order
    keys_by_column: dict[str, list[str]] = {}
    for key, column in mapping.items():
        if column:
            keys_by_column.setdefault(column, []).append(key)

    for column, keys in keys_by_column.items():
        if len(keys) < 2:
            continue
        report.duplicate_columns.append(column)
        report.issues.append(DuplicateMapping(
            column=column,
            field_keys=keys,
            message=f"Duplicate column mappings detected: {column} ({', '.join(keys)})",
        ))

    return report
