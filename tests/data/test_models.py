import pytest

from data.models import PackagingUnit, PreferenceConfig, ProductRecord

OFF_PAYLOAD = {
    "nutriscore_grade": "B",
    "ecoscore_grade": "unknown",
    "nova_group": "4",
    "additives_tags": ["en:e330", "en:e471"],
    "ingredients_analysis_tags": ["en:palm-oil"],
    "labels_tags": ["en:organic"],
    "ingredients_text": "Sugar, palm oil",
    "brands": "Dove, Unilever",
    "packagings": [{"recycling": "en:recycle"}, {"material": "en:plastic"}],
    "origins_tags": ["en:france"],
    "manufacturing_places_tags": ["en:belgium"],
}


class TestProductRecordFromDict:
    def test_open_food_facts_payload(self):
        record = ProductRecord.from_dict(OFF_PAYLOAD)

        assert record.nutrition_grade == "b"
        assert record.eco_grade is None
        assert record.nova_group == 4
        assert record.additive_codes == ("en:e330", "en:e471")
        assert record.analysis_tags == ("en:palm-oil",)
        assert record.label_tags == ("en:organic",)
        assert record.brand_name == "Dove, Unilever"
        assert record.packaging_units == (PackagingUnit("en:recycle"), PackagingUnit(None))
        assert record.origin_signal == "en:france"
        assert record.origin_tags == ("en:france", "en:belgium")

    def test_snake_case_fields(self):
        record = ProductRecord.from_dict({
            "nutrition_grade": "a",
            "eco_grade": "c",
            "label_tags": "en:vegan, en:organic",
            "origin_signal": "Italy",
        })
        assert record.nutrition_grade == "a"
        assert record.eco_grade == "c"
        assert record.label_tags == ("en:vegan", "en:organic")
        assert record.origin_signal == "Italy"

    def test_free_text_origin_fallback(self):
        record = ProductRecord.from_dict({"manufacturing_places": "Made in Spain"})
        assert record.origin_signal == "Made in Spain"

    def test_empty_payload(self):
        assert ProductRecord.from_dict({}) == ProductRecord()

    def test_out_of_range_nova_group(self):
        assert ProductRecord.from_dict({"nova_group": 7}).nova_group is None

    @pytest.mark.parametrize("payload", [
        {"nova_group": "four"},
        {"labels_tags": 12},
        {"ingredients_text": ["water"]},
        {"packagings": "plastic"},
    ])
    def test_malformed_values_raise(self, payload):
        with pytest.raises((TypeError, ValueError)):
            ProductRecord.from_dict(payload)


class TestPreferenceConfig:
    def test_defaults_are_off_and_neutral(self):
        prefs = PreferenceConfig()
        assert not prefs.geopolitical_enabled
        assert prefs.axis_choice("india_china") == "neutral"
        assert prefs.axis_choice("anything_else") == "neutral"

    def test_from_camel_case(self):
        prefs = PreferenceConfig.from_dict({
            "geopoliticalEnabled": True,
            "israelPalestine": "avoid_palestine",
            "avoidForcedLabour": 1,
            "ethicalEnabled": True,
        })
        assert prefs.geopolitical_enabled is True
        assert prefs.israel_palestine == "avoid_palestine"
        assert prefs.avoid_forced_labour is True
        assert prefs.ethical_enabled is True
        assert prefs.environmental_enabled is False

    def test_unknown_string_keys_become_extra_axes(self):
        prefs = PreferenceConfig.from_dict({"northSouth": "avoid_north", "extraFlag": True})
        assert prefs.axis_choice("north_south") == "avoid_north"
        assert "extra_flag" not in prefs.extra_axes


def test_none_collections_mean_absent():
    record = ProductRecord(
        additive_codes=None,
        analysis_tags=None,
        label_tags=None,
        packaging_units=None,
        origin_tags=None,
    )
    assert record == ProductRecord()


@pytest.mark.parametrize("raw, expected", [
    ("false", False),
    ("False", False),
    ("0", False),
    (0, False),
    (None, False),
    ("true", True),
    (" TRUE ", True),
    ("1", True),
    (True, True),
])
def test_string_booleans(raw, expected):
    prefs = PreferenceConfig.from_dict({"environmentalEnabled": raw, "avoidPalmOil": raw})
    assert prefs.environmental_enabled is expected
    assert prefs.avoid_palm_oil is expected


@pytest.mark.parametrize("raw", ["yes", "", 2, [True]])
def test_unparseable_boolean_raises(raw):
    with pytest.raises(TypeError):
        PreferenceConfig.from_dict({"ethicalEnabled": raw})
