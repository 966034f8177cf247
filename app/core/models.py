"""Pydantic models for the Column Reconciler API.

This module defines the domain and request/response models:
- BusinessField: One entry of a field catalog
- SheetData: Headers and sampled rows read from a worksheet
- MissingMapping / InvalidMapping / DuplicateMapping: Validator findings
- ValidationReport: Every finding of one validation call
- AutoMapResponse / ReconcileResponse: Results of the mapping endpoints
- ReconcileRequest / ValidateRequest: JSON request bodies
- ErrorResponse: Error response for failed requests
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, computed_field


class BusinessField(BaseModel):
    """A named business concept to be populated from a spreadsheet column."""

    model_config = {"frozen": True}

    key: str = Field(description="Unique identifier of the field (e.g., 'roadTax')")
    label: str = Field(
        description="Human-readable description (e.g., 'Road tax (% tax on Ex showroom excl. subsidy) [130]')",
    )


class SheetData(BaseModel):
    """Header row and sampled data rows of a worksheet.

    Every row in `rows` is aligned with `headers` and padded with empty
    strings, so `rows[i][j]` is the text of column `headers[j]`.
    """

    sheet_name: str
    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    def column_values(self, header: str) -> list[str]:
        """Sampled values of the first column with this header, or [] if absent."""
        try:
            index = self.headers.index(header)
        except ValueError:
            return []
        return [row[index] for row in self.rows]


class MissingMapping(BaseModel):
    """A required field has no assigned column."""

    kind: Literal["missing_mapping"] = "missing_mapping"
    severity: Literal["error"] = "error"
    field_key: str
    message: str


class InvalidMapping(BaseModel):
    """An assigned column no longer exists among the current columns."""

    kind: Literal["invalid_mapping"] = "invalid_mapping"
    severity: Literal["error"] = "error"
    field_key: str
    column: str
    message: str


class DuplicateMapping(BaseModel):
    """One column is assigned to two or more fields (non-fatal)."""

    kind: Literal["duplicate_mapping"] = "duplicate_mapping"
    severity: Literal["warning"] = "warning"
    column: str
    field_keys: list[str]
    message: str


MappingIssue = Annotated[
    Union[MissingMapping, InvalidMapping, DuplicateMapping],
    Field(discriminator="kind"),
]


class ValidationReport(BaseModel):
    """Complete result of validating a mapping against a catalog."""

    issues: list[MappingIssue] = Field(default_factory=list)
    valid_fields: list[str] = Field(
        default_factory=list,
        description="Field keys mapped to an existing column",
    )
    missing_fields: list[str] = Field(default_factory=list)
    invalid_fields: list[str] = Field(default_factory=list)
    duplicate_columns: list[str] = Field(default_factory=list)
    total_required: int = 0

    @computed_field
    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "error"]

    @computed_field
    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.missing_fields and not self.invalid_fields


class AutoMapResponse(BaseModel):
    """Successful response from the /map endpoint."""

    filename: str
    sheet_name: str
    columns: list[str] = Field(description="Header strings in sheet order")
    mapping: dict[str, str] = Field(description="Field key to column header")
    auto_mapped: list[str] = Field(
        default_factory=list,
        description="Field keys filled by automatic reconciliation",
    )
    preview: dict[str, str] = Field(
        default_factory=dict,
        description="First data row value of each mapped column, by field key",
    )
    validation: ValidationReport

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "filename": "price_list.xlsx",
                    "sheet_name": "Sheet1",
                    "columns": ["Model", "Insurance", "Road Tax %"],
                    "mapping": {"insurance": "Insurance", "roadTax": "Road Tax %"},
                    "auto_mapped": ["insurance", "roadTax"],
                    "preview": {"insurance": "5230", "roadTax": "0"},
                    "validation": {
                        "issues": [
                            {
                                "kind": "missing_mapping",
                                "severity": "error",
                                "field_key": "emps",
                                "message": "Missing mapping for: EMPS",
                            }
                        ],
                        "valid_fields": ["insurance", "roadTax"],
                        "missing_fields": ["emps"],
                        "invalid_fields": [],
                        "duplicate_columns": [],
                        "total_required": 3,
                    },
                }
            ]
        }
    }


class ReconcileRequest(BaseModel):
    """Request body for /reconcile; `catalog` defaults to the built-in catalog."""

    columns: list[str]
    catalog: list[BusinessField] | None = None


class ReconcileResponse(BaseModel):
    mapping: dict[str, str]
    validation: ValidationReport


class ValidateRequest(BaseModel):
    """Request body for /validate, typically a mapping edited by a user."""

    mapping: dict[str, str | None]
    columns: list[str]
    catalog: list[BusinessField] | None = None


class ErrorResponse(BaseModel):
    """Error response for failed requests.

    Returned with appropriate HTTP status codes (400, 422).
    """

    error: str = Field(
        description="Brief error message describing what went wrong"
    )
    detail: str | None = Field(
        default=None,
        description="Additional error details (if available)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "Invalid file format",
                    "detail": "Expected .xlsx file, got '.csv'",
                },
                {
                    "error": "Failed to load workbook",
                    "detail": "File appears to be corrupted or password-protected",
                },
            ]
        }
    }
