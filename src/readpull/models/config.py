"""Pydantic configuration models for readpull."""

from typing import Literal

from pydantic import BaseModel, Field

CharClass = Literal["Upper", "Lower", "Digit", "Symbol", "Other"]

DEFAULT_TRANSITION_COSTS: dict[str, float] = {
    "Upper:Lower": 0.2,
    "Lower:Upper": 0.5,
    "Symbol:Upper": 0.4,
    "Symbol:Lower": 0.3,
    "Symbol:Digit": 0.9,
    "Upper:Digit": 1.4,
    "Lower:Digit": 1.3,
    "Digit:Upper": 1.4,
    "Digit:Lower": 1.5,
    "Digit:Symbol": 1.2,
    "Upper:Symbol": 0.2,
    "Lower:Symbol": 0.2,
    "Digit:Digit": 1.2,
    "Symbol:Symbol": 0.3,
    "Upper:Upper": 0.1,
    "Lower:Lower": 0.1,
    "Other:Other": 0.0,
}

# Non-renderable elements; stylesheet/preload links are matched by their rel
DEFAULT_REMOVED_SELECTORS = (
    "script",
    "style",
    "link[rel]",
    "iframe",
    "embed",
    "object",
    "meta",
    "svg",
    "path",
    "canvas",
    "video",
    "audio",
    "picture",
    "source",
    "track",
)

DEFAULT_ALLOWED_ATTRIBUTES = frozenset(
    {
        "id",
        "class",
        "href",
        "lang",
        "title",
        "alt",
        "value",
        "name",
        "placeholder",
        "checked",
        "selected",
        "disabled",
        "readonly",
        "action",
        "method",
        "src",
    }
)


class ClassifierConfig(BaseModel):
    """Configuration for the identifier gibberish classifier."""

    min_length: int = Field(4, ge=1, description="Tokens shorter than this are never gibberish")
    threshold: float = Field(0.3, ge=0, description="Normalized score at or above which a token is gibberish")
    default_cost: float = Field(1.0, ge=0, description="Cost of a transition missing from the table")
    transition_costs: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_TRANSITION_COSTS),
        description="Cost per 'FromClass:ToClass' character transition",
    )

    model_config = {"extra": "forbid"}

    def cost(self, source: CharClass, target: CharClass) -> float:
        """Look up the cost of moving from one character class to another."""
        return self.transition_costs.get(f"{source}:{target}", self.default_cost)


class NormalizerConfig(BaseModel):
    """Configuration for markup normalization."""

    max_text_length: int = Field(120, ge=0, description="Text nodes longer than this are truncated")
    max_attribute_length: int = Field(100, ge=0, description="Attribute values longer than this are truncated")
    truncation_suffix: str = Field(" (truncated...)", description="Marker appended to truncated content")
    removed_selectors: tuple[str, ...] = Field(
        DEFAULT_REMOVED_SELECTORS,
        description="Selectors for elements removed before anything else",
    )
    allowed_attributes: frozenset[str] = Field(
        DEFAULT_ALLOWED_ATTRIBUTES,
        description="Attributes kept on every element",
    )
    allowed_attribute_prefixes: tuple[str, ...] = Field(
        ("data-",),
        description="Attribute name prefixes kept on every element",
    )
    url_attributes: tuple[str, ...] = Field(
        ("href", "src", "action"),
        description="Attributes whose same-host absolute URLs are made host-relative",
    )
    untruncated_attributes: frozenset[str] = Field(
        frozenset({"id", "class"}),
        description="Attributes exempt from value truncation",
    )
    drop_gibberish_identifiers: bool = Field(
        True,
        description="Drop machine-generated id, class and data-* values",
    )

    model_config = {"extra": "forbid"}

    def is_allowed_attribute(self, name: str) -> bool:
        """Check whether an attribute survives attribute filtering."""
        return name in self.allowed_attributes or name.startswith(self.allowed_attribute_prefixes)


class ReadpullConfig(BaseModel):
    """
    Root configuration for the extraction engine.

    Example:
        config = ReadpullConfig(normalizer={"max_text_length": 200})
        engine = PresetEngine(config)
    """

    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO",
        description="Logging level",
    )

    model_config = {"extra": "forbid"}
