from app.mapper.normalizers import keywords, normalize


class TestNormalize:
    def test_lowercases_and_strips_punctuation(self):
        assert normalize("RTO - Road safety tax / CESS.") == "rtoroadsafetytaxcess"

    def test_removes_bracketed_annotations_characters(self):
        assert normalize("Road tax [130]") == "roadtax130"
        assert normalize("Road Tax %") == "roadtax"

    def test_camel_case_key(self):
        assert normalize("exShowroomPrice") == "exshowroomprice"

    def test_non_ascii_letters_removed(self):
        assert normalize("Café Price") == "cafprice"

    def test_empty_input(self):
        assert normalize("") == ""
        assert normalize(" - / . ") == ""


class TestKeywords:
    def test_drops_short_tokens(self):
        assert keywords("P1 Total (Excl Insurance and RTO but incl subsidys)") == [
            "total", "excl", "insurance", "and", "rto", "but", "incl", "subsidys",
        ]

    def test_punctuation_splits_words(self):
        assert keywords("Smart card fee & RTO registration") == [
            "smart", "card", "fee", "rto", "registration",
        ]
        assert keywords("Ex Showroom price (excl Incentives/Subsidy)") == [
            "showroom", "price", "excl", "incentives", "subsidy",
        ]

    def test_duplicates_are_kept(self):
        assert keywords("Road tax (% tax on Ex showroom excl. subsidy) [130]") == [
            "road", "tax", "tax", "showroom", "excl", "subsidy", "130",
        ]

    def test_underscore_is_a_word_character(self):
        assert keywords("road_tax amount") == ["road_tax", "amount"]

    def test_no_keywords(self):
        assert keywords("") == []
        assert keywords("P1 - %") == []
