"""Data models for the recipe photo finder.

Defines Pydantic models for the recipe input record, the classification and
ranking pipeline, and the per-recipe / batch results handed to callers.
All models use Pydantic v2; pipeline values are frozen once built.
"""

from enum import Enum
from typing import List, Optional, Annotated, Union

from pydantic import BaseModel, Field, field_validator, ConfigDict


class DishType(str, Enum):
    """Dish families recognised by the classifier."""

    SAUCE = "sauce"
    PASTA = "pasta"
    MEAT = "meat"
    BREAKFAST = "breakfast"
    DESSERT = "dessert"
    SOUP = "soup"
    GENERIC = "generic"


class Dietary(str, Enum):
    REGULAR = "regular"
    VEGAN = "vegan"


class PhotoSource(str, Enum):
    """Photo search providers."""

    UNSPLASH = "unsplash"
    PEXELS = "pexels"


class SearchMode(str, Enum):
    """Provider orchestration strategy.

    - SCORED: query every provider for every query and rank all candidates
    - FIRST_MATCH: accept the first food-looking candidate and stop
    """

    SCORED = "scored"
    FIRST_MATCH = "first-match"


class Ingredient(BaseModel):
    """Structured ingredient; only the name matters for photo search.

    Quantities, units and any other keys are ignored whatever their type.
    """

    model_config = ConfigDict(extra="ignore")

    name: Annotated[Optional[str], Field(None, description="Ingredient name")]


class Recipe(BaseModel):
    """Recipe record as stored by the enclosing application.

    Only the fields used for classification and existing-image detection are
    modelled; anything else in the source document is ignored. Every field is
    optional so partially filled records can still be illustrated.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Annotated[Optional[str], Field(None, description="Recipe identifier in the host application")]
    title: Annotated[Optional[str], Field(None, description="Recipe title")]
    description: Annotated[Optional[str], Field(None, description="Free text description")]
    ingredients: Annotated[
        List[Union[Ingredient, str]],
        Field(default_factory=list, description="Plain strings or structured ingredients"),
    ]
    tags: Annotated[List[str], Field(default_factory=list, description="Free-form recipe tags")]
    category: Annotated[Optional[str], Field(None, description="Category slug, e.g. 'sauces' or 'main-dishes'")]
    image_url: Annotated[Optional[str], Field(None, alias="imageUrl", description="External image URL")]
    photos: Annotated[List[str], Field(default_factory=list, description="Uploaded photo identifiers")]
    has_uploaded_image: Annotated[bool, Field(False, description="True when the user uploaded an image")]

    @field_validator("ingredients", "tags", "photos", mode="before")
    @classmethod
    def none_to_empty_list(cls, value):
        """Treat a null list field as empty."""
        return value or []


class RecipeContext(BaseModel):
    """Lower-cased text blob built from a recipe's fields.

    display_title keeps the original casing (whitespace trimmed) so fallback
    search queries read like the recipe's own title.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    ingredients_text: str = ""
    tags_text: str = ""
    category: str = ""
    display_title: str = ""

    @property
    def all_text(self) -> str:
        """Every field joined, for "mentioned anywhere" checks."""
        return f"{self.title} {self.description} {self.ingredients_text} {self.tags_text} {self.category}"


class DishClassification(BaseModel):
    """Structured output of the dish classifier.

    Queries are ordered most specific first, distinct and never empty.
    """

    model_config = ConfigDict(frozen=True)

    dish_type: DishType
    sub_type: Optional[str] = None
    dietary: Dietary = Dietary.REGULAR
    queries: Annotated[List[str], Field(min_length=1)]

    @field_validator("queries")
    @classmethod
    def validate_queries(cls, queries: List[str]) -> List[str]:
        """Ensure queries are non-blank and distinct."""
        if any(not query.strip() for query in queries):
            raise ValueError("Search queries must not be blank")
        if len(set(queries)) != len(queries):
            raise ValueError(f"Search queries must be distinct, got: {queries}")
        return queries


class PlannedQuery(BaseModel):
    """A query as planned for the providers.

    `query` is the classifier phrase (used for scoring and reporting),
    `search_text` is what is actually sent to a provider.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    search_text: str


class Candidate(BaseModel):
    """A photo returned by a provider search, prior to scoring."""

    model_config = ConfigDict(frozen=True)

    url: str
    thumbnail_url: str = ""
    description: str = ""
    source: PhotoSource
    attribution_name: str = ""
    width: Annotated[int, Field(0, ge=0)]
    height: Annotated[int, Field(0, ge=0)]
    likes: Annotated[int, Field(0, ge=0)]


class MatchedCandidate(Candidate):
    """Candidate tagged with the (unsuffixed) query that discovered it."""

    matched_query: str


class ScoredCandidate(MatchedCandidate):
    """Candidate with its relevance score.

    Confidence is meaningless for non-positive scores; the selector discards those.
    """

    score: int
    confidence: Annotated[float, Field(ge=0.0, le=1.0)]


class ProviderResponse(BaseModel):
    """Result of one provider call: `ok=False` means unavailable or failed."""

    model_config = ConfigDict(frozen=True)

    candidates: List[Candidate] = Field(default_factory=list)
    ok: bool = True


class RecipeAnalysis(BaseModel):
    """Everything derived from a recipe before any provider is called."""

    model_config = ConfigDict(frozen=True)

    context: RecipeContext
    classification: DishClassification
    planned_queries: List[PlannedQuery]
    is_dietary_restricted: bool


class PhotoAssignment(BaseModel):
    """Chosen photo in the shape the persistence collaborator stores."""

    url: str
    attribution: str
    source: PhotoSource
    search_term: str
    description: str
    score: Optional[int] = None
    confidence: Optional[float] = None


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    NO_IMAGE_FOUND = "no_image_found"
    SKIPPED = "skipped"
    ANALYZED = "analyzed"
    ERROR = "error"


class RecipeOutcome(BaseModel):
    """Per-recipe result of a batch run."""

    title: str
    recipe_id: Optional[str] = None
    status: OutcomeStatus
    assignment: Optional[PhotoAssignment] = None
    analysis: Optional[RecipeAnalysis] = None
    error: Optional[str] = None


class BatchReport(BaseModel):
    """Summary of a batch run; one outcome per input recipe, in input order."""

    total: int = 0
    success: int = 0
    failed: int = 0
    skipped: int = 0
    outcomes: List[RecipeOutcome] = Field(default_factory=list)
