"""Unit tests for the built-in food catalog."""

from calorix.core.foods import FOOD_CATALOG, food_item_from_catalog, search_foods


class TestSearchFoods:
    """Tests for search_foods."""

    def test_case_insensitive_substring(self):
        """Matching ignores case and position."""
        names = [f.name for f in search_foods("FRANGO")]
        assert names == ["Peito de Frango Grelhado"]

    def test_multiple_matches(self):
        """Every matching food is returned in catalog order."""
        names = [f.name for f in search_foods("cozid")]
        assert names == [
            "Arroz Branco Cozido",
            "Feijão Carioca Cozido",
            "Ovo Cozido",
            "Batata Doce Cozida",
        ]

    def test_no_match(self):
        """Unknown foods return an empty list."""
        assert search_foods("sushi") == []

    def test_empty_query_returns_all(self):
        """An empty query matches the whole catalog."""
        assert len(search_foods("")) == len(FOOD_CATALOG)


class TestFoodItemFromCatalog:
    """Tests for food_item_from_catalog."""

    def test_copies_values(self, now, today):
        """Nutrition and portion are taken from the catalog row."""
        banana = search_foods("banana")[0]
        item = food_item_from_catalog(banana, "breakfast", today, now)

        assert item.name == "Banana Prata"
        assert item.calories == 60
        assert item.portion == "1 unidade"
        assert item.meal_type == "breakfast"
        assert item.date == today
        assert item.micronutrients.potassium == 358
