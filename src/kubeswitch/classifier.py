"""Context categories for kubeswitch - guesses the environment from a context name

Each category has a display color used by the context list. Production
contexts also get a warning in the decision dialog.
"""

from enum import Enum, auto


class Category(Enum):
    """Environment category of a context

    Derived from the name on every load, never persisted.
    """

    DEVELOPMENT = auto()
    STAGING = auto()
    PRODUCTION = auto()
    UNKNOWN = auto()


# Checked in order: first match wins
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.PRODUCTION, ("prod", "prd")),
    (Category.STAGING, ("stage", "stg")),
    (Category.DEVELOPMENT, ("dev", "development")),
)

CATEGORY_COLORS: dict[Category, str] = {
    Category.PRODUCTION: "dark_magenta",
    Category.STAGING: "purple",
    Category.DEVELOPMENT: "blue",
    Category.UNKNOWN: "light_sky_blue1",
}


def classify(name: str) -> Category:
    """Classify a context name by case-insensitive keyword match"""
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return Category.UNKNOWN


def get_category_color(category: Category) -> str:
    """Get the Rich color name for a category"""
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS[Category.UNKNOWN])


class KeywordClassifier:
    """Classifier port backed by the keyword table"""

    def classify(self, name: str) -> Category:
        return classify(name)
