import pytest

from data.brands import BrandRegistry


class TestBrandRegistry:
    @pytest.fixture(autouse=True)
    def setup(self, brands):
        self.registry = brands

    def test_exact_key(self):
        assert self.registry.get_brand_data("Unilever").key == "unilever"

    def test_alias(self):
        assert self.registry.get_brand_data("P&G").key == "procter & gamble"

    def test_subsidiary(self):
        assert self.registry.get_brand_data("Herbal Essences").key == "procter & gamble"

    def test_comma_separated_brands(self):
        assert self.registry.get_brand_data("Knorr, Unilever").key == "unilever"

    def test_partial_match(self):
        assert self.registry.get_brand_data("Nestle Waters").key == "nestle"

    def test_longest_name_wins(self):
        assert self.registry.get_brand_data("Johnson & Johnson Baby").key == "johnson & johnson"

    def test_short_alias_only_matches_exactly(self):
        assert self.registry.get_brand_data("RB").key == "reckitt"
        assert self.registry.get_brand_data("herb co") is None

    @pytest.mark.parametrize("name", [None, "", "   ", 42])
    def test_unusable_names(self, name):
        assert self.registry.get_brand_data(name) is None

    def test_is_flagged(self):
        assert self.registry.is_flagged("dove")
        assert not self.registry.is_flagged("ferrero")
        assert not self.registry.is_flagged("Unknown Local Bakery")

    def test_is_country_linked(self):
        assert self.registry.is_country_linked("Nescafe", "ch")
        assert not self.registry.is_country_linked("Nescafe", "US")
        assert not self.registry.is_country_linked(None, "US")

    def test_flagged_companies(self):
        flagged = self.registry.flagged_companies()
        assert "Unilever" in flagged
        assert "Ferrero" not in flagged

    def test_contains(self):
        assert "dove" in self.registry
        assert "nothing like it" not in self.registry


def test_parent_company_flag_is_inherited():
    registry = BrandRegistry.from_mapping({
        "parentco": {"name": "ParentCo", "flagged": True},
        "childco": {"name": "ChildCo", "parent_company": "parentco"},
    })
    assert registry.is_flagged("childco")


def test_load_custom_file(tmp_path):
    path = tmp_path / "brands.yml"
    path.write_text(
        "companies:\n"
        "  acme:\n"
        "    name: Acme\n"
        "    aliases: [Acme Corp]\n"
        "    country_of_origin: [us]\n",
        encoding="utf-8",
    )

    registry = BrandRegistry.load(path)

    assert len(registry) == 1
    assert registry.get_brand_data("acme corp").name == "Acme"
    assert registry.is_country_linked("acme", "US")
