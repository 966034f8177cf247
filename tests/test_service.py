"""Tests for the ColumnMappingService wiring."""

from app.core.config import Settings
from app.core.models import BusinessField, SheetData
from app.mapper.matcher import MatcherConfig
from app.mapper.service import ColumnMappingService, MappingServiceConfig


class TestMappingServiceConfig:
    def test_defaults_match_matcher_defaults(self):
        assert MappingServiceConfig().matcher_config() == MatcherConfig()

    def test_from_settings(self):
        settings = Settings(
            match_threshold=0.7,
            denylist_tokens=["dealer"],
            boost_tokens=["gst"],
            boost_amount=0.1,
            sample_rows=3,
        )
        config = MappingServiceConfig.from_settings(settings)

        assert config.sample_rows == 3
        assert config.matcher_config() == MatcherConfig(
            threshold=0.7,
            denylist=("dealer",),
            boost_tokens=("gst",),
            boost_amount=0.1,
        )


class TestColumnMappingService:
    def test_map_workbook(self, make_workbook, price_list_rows):
        service = ColumnMappingService()
        result = service.map_workbook(make_workbook(price_list_rows, title="Prices"), filename="prices.xlsx")

        assert result.filename == "prices.xlsx"
        assert result.sheet_name == "Prices"
        assert result.columns == price_list_rows[0]
        assert result.mapping["insurance"] == "Insurance"
        assert result.preview["insurance"] == "5230"
        assert result.preview["exShowroomPrice"] == "145000"
        assert "effectiveOnRoadCore" in result.validation.missing_fields

    def test_auto_mapped_follows_catalog_order(self, make_workbook, price_list_rows):
        result = ColumnMappingService().map_workbook(make_workbook(price_list_rows), filename="p.xlsx")
        assert result.auto_mapped == [
            "exShowroomPrice",
            "emps",
            "stateSubsidy",
            "postGstDiscount",
            "insurance",
            "rtoRoadSafety",
            "postalCharges",
            "roadTax",
        ]

    def test_preview_empty_without_data_rows(self):
        sheet = SheetData(sheet_name="Sheet1", headers=["Insurance"])
        result = ColumnMappingService().map_sheet(sheet, filename="p.xlsx")
        assert result.preview == {"insurance": ""}

    def test_custom_catalog(self):
        catalog = [BusinessField(key="dealerMargin", label="Dealer margin")]
        service = ColumnMappingService(catalog=catalog)
        result = service.reconcile(["Model", "Dealer Margin %"])

        assert result.mapping == {"dealerMargin": "Dealer Margin %"}
        assert result.validation.is_valid

    def test_request_catalog_overrides_default(self):
        catalog = [BusinessField(key="fee", label="Fee")]
        result = ColumnMappingService().reconcile(["Fee"], catalog=catalog)
        assert result.mapping == {"fee": "Fee"}
        assert result.validation.total_required == 1

    def test_validate_user_override(self):
        service = ColumnMappingService()
        report = service.validate({"insurance": "Insurance", "emps": "Insurance"}, ["Insurance"])

        assert report.duplicate_columns == ["Insurance"]
        assert report.total_required == 14
        assert "exShowroomPrice" in report.missing_fields

    def test_denylist_from_config(self):
        config = MappingServiceConfig(denylist_tokens=["amount"])
        catalog = [BusinessField(key="insurance", label="Insurance")]
        service = ColumnMappingService(config=config, catalog=catalog)

        assert service.reconcile(["Insurance Amount"]).mapping == {}
        assert ColumnMappingService(catalog=catalog).reconcile(["Insurance Amount"]).mapping == {
            "insurance": "Insurance Amount"
        }
