"""End-to-end TruScore scenarios with hand-computed expectations."""

from data.models import PreferenceConfig
from scoring.types import PillarBreakdown

# Golden product payloads (Open Food Facts shaped)
GOLDEN_PRODUCTS = {
    "empty_record": {},
    "placeholder_ingredients": {
        "ingredients_text": "product not available",
        "origins_tags": ["en:france"],
    },
    "unresolved_additives": {
        "additives_tags": ["en:e412"] * 20,
    },
    "flagged_brand": {
        "brands": "Dove",
        "labels_tags": ["en:fair-trade"],
    },
    "wholefood_cereal": {
        "nutriscore_grade": "a",
        "ecoscore_grade": "b",
        "nova_group": 1,
        "labels_tags": ["en:organic", "en:vegan"],
        "ingredients_text": "Whole grain oats",
        "brands": "Jordans",
        "origins_tags": ["en:united-kingdom"],
        "packagings": [{"recycling": "en:recycle"}, {"recycling": "en:recycle"}],
    },
    "processed_snack": {
        "nutriscore_grade": "d",
        "ecoscore_grade": "d",
        "nova_group": 4,
        "additives_tags": ["en:e621", "en:e150d", "en:e330"],
        "ingredients_analysis_tags": ["en:palm-oil", "en:non-vegan"],
        "ingredients_text": "Potatoes, palm oil, flavourings, natural flavor, aroma",
        "brands": "Ferrero",
        "packagings": [{"recycling": "en:discard"}],
    },
}


def test_empty_record(engine):
    result = engine.compute_score(GOLDEN_PRODUCTS["empty_record"])

    assert result.breakdown == PillarBreakdown(body=25, planet=25, care=18, open=10)
    assert result.composite_score == 78
    assert result.availability_signals.has_primary_nutrition_signal is False
    assert result.availability_signals.has_primary_eco_signal is False
    assert result.availability_signals.has_origin_signal is False
    assert result.insights == ()


def test_placeholder_ingredients(engine):
    result = engine.compute_score(GOLDEN_PRODUCTS["placeholder_ingredients"])

    assert result.breakdown.open == 5
    assert result.availability_signals.has_origin_signal is True


def test_placeholder_without_origin_floors_at_zero(engine):
    result = engine.compute_score({"ingredients_text": "product not available"})
    assert result.breakdown.open == 0


def test_unresolved_additives_capped(engine):
    result = engine.compute_score(GOLDEN_PRODUCTS["unresolved_additives"])

    additive_step = [a for a in result.adjustments["body"] if a.label == "additives"][0]
    assert additive_step.delta == -15
    assert result.breakdown.body == 10
    assert result.composite_score == 63


def test_flagged_brand(engine):
    result = engine.compute_score(GOLDEN_PRODUCTS["flagged_brand"])

    # 18 + 8 - 30 clamps to 0
    assert result.breakdown.care == 0
    assert result.composite_score == 60


def test_wholefood_cereal(engine):
    result = engine.compute_score(GOLDEN_PRODUCTS["wholefood_cereal"])

    assert result.breakdown == PillarBreakdown(body=25, planet=25, care=25, open=25)
    assert result.composite_score == 100
    assert result.availability_signals.has_primary_nutrition_signal is True
    assert result.availability_signals.has_primary_eco_signal is True
    assert result.availability_signals.has_origin_signal is True


def test_processed_snack(engine):
    result = engine.compute_score(GOLDEN_PRODUCTS["processed_snack"])

    # Body: 10 - (1.5 + 1.5 + 0.5) - 4 (palm tag) - 10 (aroma) - 10 (nova 4) -> 0
    # Planet: 10 - 10 (palm) -> 0
    # Open: 3 hidden terms -> 25 - 20, no origin -> 0
    assert result.breakdown == PillarBreakdown(body=0, planet=0, care=18, open=0)
    assert result.composite_score == 18


def test_master_switches_off(engine):
    prefs = PreferenceConfig(
        india_china="avoid_china",
        avoid_animal_testing=True,
        avoid_forced_labour=True,
        avoid_palm_oil=True,
    )
    result = engine.compute_score(GOLDEN_PRODUCTS["processed_snack"], prefs)
    assert result.insights == ()


def test_palmolein_fires_and_palm_oil_free_does_not(engine):
    prefs = PreferenceConfig(environmental_enabled=True, avoid_palm_oil=True)

    fires = engine.compute_score({"ingredients_text": "wheat flour, palmolein"}, prefs)
    silent = engine.compute_score({"ingredients_text": "palm-oil-free spread: rapeseed oil"}, prefs)

    assert [i.message for i in fires.insights] == ["Contains unsustainable palm oil"]
    assert silent.insights == ()


def test_palmolein_sentence(engine):
    prefs = PreferenceConfig(environmental_enabled=True, avoid_palm_oil=True)
    result = engine.compute_score({"ingredients_text": "contains palmolein and salt"}, prefs)
    assert len(result.insights) == 1
