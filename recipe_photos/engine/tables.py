"""Keyword and query tables driving classification, filtering and scoring.

Tables are immutable (tuples / read-only mappings) so rules can be tested on
their own and extended without touching control flow.
"""

from types import MappingProxyType


# ============================================================================
# Search query sets, keyed by dish sub-type (most specific phrase first)
# ============================================================================

QUERY_SETS = MappingProxyType({
    "vegan_alfredo": (
        "vegan alfredo sauce white bowl",
        "cashew cream sauce white",
        "dairy free alfredo sauce",
        "plant based white sauce pasta",
        "vegan pasta sauce creamy white",
    ),
    "alfredo": (
        "alfredo sauce white creamy bowl",
        "white pasta sauce parmesan",
        "creamy alfredo sauce dish",
        "traditional alfredo sauce",
    ),
    "tomato": (
        "marinara sauce red tomato bowl",
        "tomato pasta sauce red",
        "red pasta sauce bowl",
        "italian tomato sauce",
    ),
    "pesto": (
        "pesto sauce green basil",
        "basil pesto sauce bowl",
        "green pesto sauce",
        "italian pesto",
    ),
    "generic_sauce": (
        "pasta sauce bowl cooking",
        "homemade sauce kitchen",
        "cooking sauce recipe",
    ),
    "lasagna": (
        "vegetarian lasagna layers cheese baked",
        "cheese lasagna casserole dish",
        "homemade lasagna layers pasta",
        "baked lasagna cheese layers",
        "lasagna pasta dish italian",
    ),
    "italian_drunken_noodles": (
        "italian drunken noodles pasta",
        "drunken noodles italian style",
        "pasta with vegetables italian",
        "italian pasta dish colorful",
        "drunken pasta italian recipe",
    ),
    "thai_noodles": (
        "thai drunken noodles pad kee mao",
        "spicy wide rice noodles thai",
        "thai stir fry noodles vegetables",
    ),
    "carbonara": (
        "pasta carbonara creamy italian",
        "spaghetti carbonara dish",
        "carbonara pasta bowl",
        "italian carbonara pasta",
    ),
    "generic_pasta": (
        "pasta dish italian homemade",
        "cooked pasta meal plate",
        "italian pasta dinner",
    ),
    "sweet_sour_chicken": (
        "sweet and sour chicken pieces orange",
        "chinese sweet sour chicken dish",
        "chicken with sweet sour sauce",
        "orange glazed chicken pieces",
        "asian sweet sour chicken",
    ),
    "pineapple_chicken": (
        "chicken with pineapple chunks tropical",
        "hawaiian chicken pineapple dish",
        "tropical chicken pineapple",
        "grilled chicken pineapple sauce",
    ),
    "chicken_alfredo": (
        "chicken alfredo pasta creamy",
        "fettuccine chicken alfredo",
        "chicken pasta alfredo sauce",
        "creamy chicken pasta",
    ),
    "chicken": (
        "cooked chicken dish plate",
        "chicken dinner main course",
        "chicken meal homemade",
    ),
    "breakfast": (
        "breakfast food plate morning",
        "breakfast meal homemade",
        "morning breakfast dish",
    ),
    "dessert": (
        "homemade dessert sweet",
        "dessert plate sweet",
        "baked dessert food",
    ),
    "soup": (
        "homemade soup bowl",
        "soup dish comfort food",
        "warm soup bowl",
    ),
})

# Used when the fallback branch cannot build any usable query
FALLBACK_SAFETY_QUERY = "homemade food"

# Category that never adds a "{category} food" query
GENERIC_CATEGORY = "entrees"


# ============================================================================
# Classifier trigger words
# ============================================================================

VEGAN_MARKERS = ("vegan", "cashew", "plant")
PASTA_TITLE_WORDS = ("pasta", "noodles", "lasagna", "spaghetti", "linguine", "fettuccine")
PASTA_INGREDIENT_WORDS = ("pasta", "noodles")
LASAGNA_WORDS = ("lasagna", "lasagne")
BREAKFAST_TITLE_WORDS = ("pancake", "waffle", "breakfast", "cereal", "oatmeal")
DESSERT_TITLE_WORDS = ("cake", "cookie", "dessert", "pie", "chocolate")
SOUP_TITLE_WORDS = ("soup", "stew", "broth")

# Dietary restriction flag (title / tags)
RESTRICTED_TITLE_WORDS = ("vegan", "vegetarian", "gluten")
RESTRICTED_TAG_WORDS = ("vegan", "vegetarian")


# ============================================================================
# Basic description filter (first-match and all-candidates modes)
# ============================================================================

FILTER_FOOD_KEYWORDS = (
    "food", "dish", "meal", "sauce", "pasta", "chicken", "recipe", "cooking",
    "kitchen", "plate", "bowl", "dinner", "lunch", "breakfast",
)
FILTER_BLOCKED_KEYWORDS = ("person", "people", "man", "woman", "restaurant", "menu", "logo")


# ============================================================================
# Relevance scoring weights
# ============================================================================

SCORE_FOOD_KEYWORDS = (
    "food", "dish", "meal", "recipe", "cooking", "kitchen", "plate", "bowl", "sauce", "pasta", "chicken",
)
FOOD_KEYWORD_WEIGHT = 2
QUERY_WORD_WEIGHT = 5

ALFREDO_SAUCE_BONUS = 10
LASAGNA_BONUS = 10
CHICKEN_BONUS = 8

NON_VEGAN_KEYWORDS = ("meat", "dairy", "cheese", "beef", "chicken", "fish")
NON_VEGAN_PENALTY = -20
VEGAN_FRIENDLY_KEYWORDS = ("vegan", "plant", "cashew", "dairy free")
VEGAN_FRIENDLY_BONUS = 8

UNRELATED_KEYWORDS = ("person", "people", "background", "text", "logo", "building")
UNRELATED_KEYWORD_WEIGHT = -3

QUALITY_KEYWORDS = ("homemade", "fresh", "delicious")
QUALITY_BONUS = 2

# Score at which confidence saturates at 1.0
CONFIDENCE_SCALE = 10
# Weight of confidence in the selector's ranking key
CONFIDENCE_RANK_WEIGHT = 5
