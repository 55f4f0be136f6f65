"""Unit tests for the dish classifier decision tree.

Tests cover:
- Branch priority (first match wins)
- Sub-type selection inside each branch
- Vegan alfredo detection
- Fallback title cleaning and the safety query
"""

import pytest

from recipe_photos.engine.classifier import DISH_RULES, clean_title, classify_dish
from recipe_photos.engine.normalizer import normalize_recipe
from recipe_photos.engine.tables import FALLBACK_SAFETY_QUERY, QUERY_SETS
from recipe_photos.models.models import Dietary, DishType, Recipe


def classify(**fields):
    return classify_dish(normalize_recipe(Recipe(**fields)))


class TestRuleOrder:
    def test_rules_are_evaluated_in_documented_order(self):
        assert [rule.name for rule in DISH_RULES] == [
            "sauce", "pasta", "chicken", "breakfast", "dessert", "soup",
        ]

    def test_chicken_alfredo_is_pasta_not_generic_chicken(self):
        result = classify(title="Chicken Alfredo")

        assert result.dish_type == DishType.PASTA
        assert result.sub_type == "chicken_alfredo"
        assert result.queries == list(QUERY_SETS["chicken_alfredo"])

    def test_sauce_wins_over_pasta_and_chicken(self):
        result = classify(title="Chicken Pasta Sauce")
        assert result.dish_type == DishType.SAUCE

    def test_pasta_wins_over_chicken(self):
        result = classify(title="Chicken Noodles")
        assert result.dish_type == DishType.PASTA
        assert result.sub_type == "generic"

    def test_chicken_wins_over_soup(self):
        result = classify(title="Chicken Soup")
        assert result.dish_type == DishType.MEAT
        assert result.sub_type == "chicken"


class TestSauce:
    def test_vegan_alfredo_sauce(self):
        result = classify(
            title="Doc Bear's Vegan Alfredo Sauce I",
            ingredients=["cashews", "nutritional yeast"],
        )

        assert result.dish_type == DishType.SAUCE
        assert result.sub_type == "alfredo"
        assert result.dietary == Dietary.VEGAN
        assert result.queries[0] == "vegan alfredo sauce white bowl"

    def test_cashew_ingredient_alone_selects_vegan_set(self):
        result = classify(title="Alfredo Sauce", ingredients=[{"name": "Raw Cashew"}])
        assert result.dietary == Dietary.VEGAN
        assert result.queries == list(QUERY_SETS["vegan_alfredo"])

    def test_regular_alfredo(self):
        result = classify(title="Classic Alfredo Sauce", ingredients=["butter", "parmesan"])

        assert result.sub_type == "alfredo"
        assert result.dietary == Dietary.REGULAR
        assert result.queries == list(QUERY_SETS["alfredo"])

    def test_alfredo_in_description_counts(self):
        result = classify(title="White Sauce", description="a quick alfredo")
        assert result.sub_type == "alfredo"

    def test_sauces_category_triggers_sauce_branch(self):
        result = classify(title="Grandma's Gravy", category="sauces")
        assert result.dish_type == DishType.SAUCE
        assert result.sub_type == "generic"
        assert result.queries == list(QUERY_SETS["generic_sauce"])

    def test_tomato_from_title_or_ingredients(self):
        assert classify(title="Marinara Sauce").sub_type == "tomato"
        assert classify(title="Sunday Sauce", ingredients=["Crushed Tomatoes"]).sub_type == "tomato"

    def test_pesto(self):
        result = classify(title="Basil Pesto Sauce")
        assert result.sub_type == "pesto"
        assert result.queries[0] == "pesto sauce green basil"


class TestPasta:
    def test_cheesy_lasagna(self):
        result = classify(title="Cheesy Lasagna Sheet Pasta")

        assert result.dish_type == DishType.PASTA
        assert result.sub_type == "lasagna"
        assert "vegetarian lasagna layers cheese baked" in result.queries

    def test_lasagna_set_ignores_meat_and_cheese(self):
        meaty = classify(title="Beef Lasagna", ingredients=["ground beef", "ricotta cheese"])
        plain = classify(title="Lasagna")
        assert meaty.queries == plain.queries == list(QUERY_SETS["lasagna"])

    def test_drunken_noodles_default_to_thai(self):
        result = classify(title="Drunken Noodles")
        assert result.sub_type == "thai_noodles"
        assert result.queries[0] == "thai drunken noodles pad kee mao"

    def test_italian_drunken_noodles(self):
        result = classify(title="Italian Drunken Noodles")
        assert result.sub_type == "italian_drunken_noodles"

    def test_carbonara(self):
        assert classify(title="Spaghetti Carbonara").sub_type == "carbonara"

    def test_pasta_from_ingredients(self):
        result = classify(title="Weeknight Bake", ingredients=["rigatoni pasta"])
        assert result.dish_type == DishType.PASTA
        assert result.queries == list(QUERY_SETS["generic_pasta"])


class TestChicken:
    def test_sweet_and_sour(self):
        result = classify(title="Sweet and Sour Pineapple Chicken")
        assert result.dish_type == DishType.MEAT
        assert result.sub_type == "sweet_sour_chicken"

    def test_pineapple(self):
        assert classify(title="Pineapple Chicken").sub_type == "pineapple_chicken"

    def test_chicken_from_ingredients(self):
        result = classify(title="Sheet Pan Dinner", ingredients=["chicken thighs"])
        assert result.sub_type == "chicken"


class TestMealCategories:
    @pytest.mark.parametrize("fields,dish_type", [
        ({"title": "Blueberry Pancakes"}, DishType.BREAKFAST),
        ({"title": "Eggs Benedict", "category": "breakfast"}, DishType.BREAKFAST),
        ({"title": "Apple Pie"}, DishType.DESSERT),
        ({"title": "Tiramisu", "category": "desserts"}, DishType.DESSERT),
        ({"title": "Beef Stew"}, DishType.SOUP),
        ({"title": "Gazpacho", "category": "soups"}, DishType.SOUP),
    ])
    def test_category_or_title_words(self, fields, dish_type):
        result = classify(**fields)
        assert result.dish_type == dish_type
        assert result.sub_type is None
        assert result.queries == list(QUERY_SETS[dish_type.value])

    def test_breakfast_wins_over_dessert(self):
        assert classify(title="Chocolate Waffle").dish_type == DishType.BREAKFAST


class TestFallback:
    def test_brand_prefix_and_roman_numeral(self):
        result = classify(title="Doc Bear's Backyard Surprise III")

        assert result.dish_type == DishType.GENERIC
        assert result.queries[0] == "Backyard Surprise food"
        assert result.queries == [
            "Backyard Surprise food",
            "homemade Backyard Surprise",
            "Backyard Surprise dish",
        ]

    def test_category_query_added_unless_entrees(self):
        assert classify(title="Tacos", category="main-dishes").queries[-1] == "main dishes food"
        assert "entrees food" not in classify(title="Tacos", category="entrees").queries

    def test_only_category_left(self):
        result = classify(title="Doc Bear's", category="appetizers")
        assert result.queries == ["appetizers food"]

    def test_empty_title_and_category_uses_safety_query(self):
        assert classify(title="").queries == [FALLBACK_SAFETY_QUERY]
        assert classify().queries == [FALLBACK_SAFETY_QUERY]
        assert classify(title="Doc Bear's").queries == [FALLBACK_SAFETY_QUERY]

    @pytest.mark.parametrize("title,expected", [
        ("Doc Bear's Backyard Surprise III", "Backyard Surprise"),
        ("doc bears Mystery Bake 2", "Mystery Bake"),
        ('"Famous" Meatloaf II', "Famous Meatloaf"),
        ("Doc Bear’s Casserole", "Casserole"),
        ("Kiwi Salad", "Kiwi Salad"),
    ])
    def test_clean_title(self, title, expected):
        assert clean_title(title) == expected


class TestInvariants:
    @pytest.mark.parametrize("fields", [
        {},
        {"title": ""},
        {"title": "   "},
        {"title": "'\"'"},
        {"title": "Doc Bear's I"},
        {"title": "food"},
        {"category": "entrees"},
        {"title": "Chicken Alfredo Sauce", "tags": ["vegan"]},
    ])
    def test_always_returns_non_empty_distinct_queries(self, fields):
        result = classify(**fields)

        assert len(result.queries) >= 1
        assert all(query.strip() for query in result.queries)
        assert len(set(result.queries)) == len(result.queries)

    def test_classification_is_deterministic(self):
        recipe = Recipe(title="Vegan Mushroom Alfredo Sauce", ingredients=["cashew"])
        assert classify_dish(normalize_recipe(recipe)) == classify_dish(normalize_recipe(recipe))
