"""Column mapping service module.

Provides the ColumnMappingService and MappingServiceConfig dataclass for
configuring mapper behavior, separating runtime config from app-level
settings.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openpyxl import Workbook

from app.core.catalog import DEFAULT_CATALOG
from app.core.config import Settings
from app.core.models import AutoMapResponse, BusinessField, ReconcileResponse, SheetData, ValidationReport
from app.mapper.engine import reconcile
from app.mapper.matcher import BOOST_AMOUNT, BOOST_TOKENS, DENYLIST_TOKENS, FUZZY_MATCH_THRESHOLD, MatcherConfig
from app.mapper.validator import validate_mapping
from app.mapper.workbook import read_sheet


@dataclass
class MappingServiceConfig:
    """Configuration for the ColumnMappingService.

    Allows different mapper configurations per request if needed,
    independent of global application settings.
    """

    match_threshold: float = FUZZY_MATCH_THRESHOLD
    denylist_tokens: list[str] = field(default_factory=lambda: list(DENYLIST_TOKENS))
    boost_tokens: list[str] = field(default_factory=lambda: list(BOOST_TOKENS))
    boost_amount: float = BOOST_AMOUNT
    sample_rows: int = 9
    max_columns: int = 200

    @classmethod
    def from_settings(cls, settings: Settings) -> "MappingServiceConfig":
        return cls(
            match_threshold=settings.match_threshold,
            denylist_tokens=list(settings.denylist_tokens),
            boost_tokens=list(settings.boost_tokens),
            boost_amount=settings.boost_amount,
            sample_rows=settings.sample_rows,
            max_columns=settings.max_columns,
        )

    def matcher_config(self) -> MatcherConfig:
        return MatcherConfig(
            threshold=self.match_threshold,
            denylist=tuple(self.denylist_tokens),
            boost_tokens=tuple(self.boost_tokens),
            boost_amount=self.boost_amount,
        )


class ColumnMappingService:
    """Service wiring sheet reading, reconciliation and validation together.

    Usage:
        service = ColumnMappingService(MappingServiceConfig(match_threshold=0.6))
        result = service.map_workbook(wb, filename="price_list.xlsx")

    The service keeps no per-request state; the same instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        config: MappingServiceConfig | None = None,
        catalog: Sequence[BusinessField] = DEFAULT_CATALOG,
    ):
        self.config = config or MappingServiceConfig()
        self.catalog = tuple(catalog)
        self._matcher_config = self.config.matcher_config()

    def reconcile(
        self,
        columns: Sequence[str],
        catalog: Sequence[BusinessField] | None = None,
    ) -> ReconcileResponse:
        """Reconcile a header list and validate the resulting mapping."""
        fields = tuple(catalog) if catalog is not None else self.catalog
        mapping = dict(reconcile(fields, columns, self._matcher_config))
        return ReconcileResponse(
            mapping=mapping,
            validation=validate_mapping(fields, mapping, columns),
        )

    def validate(
        self,
        mapping: Mapping[str, str | None],
        columns: Sequence[str],
        catalog: Sequence[BusinessField] | None = None,
    ) -> ValidationReport:
        """Validate a (possibly user-edited) mapping against the catalog."""
        fields = tuple(catalog) if catalog is not None else self.catalog
        return validate_mapping(fields, mapping, columns)

    def map_sheet(self, sheet: SheetData, filename: str) -> AutoMapResponse:
        """Auto-map an already read sheet and build the preview."""
        result = self.reconcile(sheet.headers)

        return AutoMapResponse(
            filename=filename,
            sheet_name=sheet.sheet_name,
            columns=sheet.headers,
            mapping=result.mapping,
            auto_mapped=[f.key for f in self.catalog if f.key in result.mapping],
            preview=self._build_preview(sheet, result.mapping),
            validation=result.validation,
        )

    def map_workbook(self, wb: "Workbook", filename: str) -> AutoMapResponse:
        """Read the first worksheet of a workbook and auto-map its headers.

        Args:
            wb: Loaded openpyxl Workbook object.
            filename: Original filename, echoed in the response.

        Returns:
            AutoMapResponse with columns, mapping, preview and validation.
        """
        sheet = read_sheet(
            wb,
            sample_rows=self.config.sample_rows,
            max_cols=self.config.max_columns,
        )
        return self.map_sheet(sheet, filename)

    def _build_preview(self, sheet: SheetData, mapping: Mapping[str, str]) -> dict[str, str]:
        """First data row value of each mapped column."""
        preview: dict[str, str] = {}
        for key, column in mapping.items():
            values = sheet.column_values(column)
            preview[key] = values[0] if values else ""
        return preview
