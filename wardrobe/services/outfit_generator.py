"""Heuristic outfit generation over a user's wardrobe.

Each item gets a base score from the request context (occasion, weather and
preferred color) plus a random jitter, then the best item of every required
category is picked. Categories with no candidate are reported rather than
treated as a failure.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from wardrobe.schemas.wardrobe import WardrobeItem

logger = logging.getLogger(__name__)

# Always attempted, in this order. Match percentage is computed against this list only.
OUTFIT_CATEGORIES = ("top", "bottom", "shoes", "accessories", "bags")

TRADITIONAL_CATEGORY = "traditional"
TRADITIONAL_MISSING_LABEL = "traditional wear"
TRADITIONAL_KEYWORDS = ("traditional", "festival")

# Ordered: the first group with a keyword found in the occasion wins
OCCASION_STYLES = (
    (("formal", "office", "work"), "formal"),
    (("casual", "weekend"), "casual"),
    (("party", "dinner"), "party"),
    (("traditional", "festival"), "traditional"),
)

STYLE_MATCH_POINTS = 30
COLOR_MATCH_POINTS = 25
NEUTRAL_COLORS = ("white", "grey", "cream")
PASTEL_COLORS = ("pink", "sky", "mint", "lavender")
PALETTE_MATCH_POINTS = 20
RAIN_FOOTWEAR_POINTS = 15
WARM_LIGHT_COLOR_POINTS = 10
COLD_TOP_POINTS = 15
JITTER_SPAN = 20.0


class OutfitGenerationError(ValueError):
    """Base class for requests the generator refuses to handle."""


class EmptyWardrobe(OutfitGenerationError):
    def __init__(self):
        super().__init__("Add items to your wardrobe first!")


class InsufficientContext(OutfitGenerationError):
    def __init__(self):
        super().__init__("Please describe at least Occasion, Weather, or Color")


@dataclass
class ScoredCandidate:
    item: WardrobeItem
    base_score: float
    jitter: float = 0.0

    @property
    def score(self) -> float:
        return self.base_score + self.jitter


@dataclass
class OutfitSuggestion:
    items: List[WardrobeItem]
    match_percentage: int
    occasion: str
    weather: str
    preferred_color: str
    missing_categories: List[str] = field(default_factory=list)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def resolve_occasion_style(occasion: str) -> Optional[str]:
    """Map free-text occasion to a style tag, or None if no keyword matches."""
    occasion = occasion.lower()
    for keywords, style in OCCASION_STYLES:
        if _contains_any(occasion, keywords):
            return style
    return None


def base_score(item: WardrobeItem, occasion: str, weather: str, preferred_color: str) -> float:
    """Deterministic part of an item's score for the given context."""
    score = 0.0
    item_color = (item.color or "").lower()

    style = resolve_occasion_style(occasion)
    if style is not None and item.style == style:
        score += STYLE_MATCH_POINTS

    if preferred_color.strip():
        user_color = preferred_color.lower()
        if user_color in item_color:
            score += COLOR_MATCH_POINTS
        if "neutral" in user_color and _contains_any(item_color, NEUTRAL_COLORS):
            score += PALETTE_MATCH_POINTS
        if "pastel" in user_color and _contains_any(item_color, PASTEL_COLORS):
            score += PALETTE_MATCH_POINTS

    weather = weather.lower()
    if "rain" in weather and item.category == "footwear":
        score += RAIN_FOOTWEAR_POINTS
    if _contains_any(weather, ("sunny", "warm")) and _contains_any(item_color, ("light", "white")):
        score += WARM_LIGHT_COLOR_POINTS
    if _contains_any(weather, ("cold", "winter")) and item.category == "top":
        score += COLD_TOP_POINTS

    return score


class OutfitGenerator:
    """Picks one item per category from a wardrobe snapshot.

    ``rng`` supplies the tie-break jitter. Pass a seeded ``random.Random`` for
    reproducible outfits; the default is an unseeded source.
    """

    def __init__(self, rng: Optional[random.Random] = None, jitter_span: float = JITTER_SPAN):
        self.rng = rng if rng is not None else random.Random()
        self.jitter_span = jitter_span

    def score(self, catalog: Sequence[WardrobeItem], occasion: str, weather: str,
              preferred_color: str) -> List[ScoredCandidate]:
        return [
            ScoredCandidate(
                item=item,
                base_score=base_score(item, occasion, weather, preferred_color),
                jitter=self.rng.random() * self.jitter_span,
            )
            for item in catalog
        ]

    def generate(self, catalog: Sequence[WardrobeItem], occasion: str = "", weather: str = "",
                 preferred_color: str = "") -> OutfitSuggestion:
        occasion = occasion or ""
        weather = weather or ""
        preferred_color = preferred_color or ""

        if not catalog:
            raise EmptyWardrobe()
        if not (occasion.strip() or weather.strip() or preferred_color.strip()):
            raise InsufficientContext()

        scored = self.score(catalog, occasion, weather, preferred_color)

        selected = []
        missing = []
        for category in OUTFIT_CATEGORIES:
            best = _best_in_category(scored, category)
            if best is None:
                missing.append(category)
            else:
                selected.append(best.item)

        match_percentage = int(round(len(selected) / len(OUTFIT_CATEGORIES) * 100))

        if _contains_any(occasion.lower(), TRADITIONAL_KEYWORDS):
            best = _best_in_category(scored, TRADITIONAL_CATEGORY)
            if best is None:
                missing.append(TRADITIONAL_MISSING_LABEL)
            else:
                selected.append(best.item)

        logger.debug(
            "Generated outfit from %d items: %d selected, missing=%s",
            len(catalog), len(selected), missing,
        )
        return OutfitSuggestion(
            items=selected,
            match_percentage=match_percentage,
            occasion=occasion,
            weather=weather,
            preferred_color=preferred_color,
            missing_categories=missing,
        )


def _best_in_category(scored: Sequence[ScoredCandidate], category: str) -> Optional[ScoredCandidate]:
    candidates = [candidate for candidate in scored if candidate.item.category == category]
    if not candidates:
        return None
    return max(candidates, key=lambda candidate: candidate.score)


def generate(catalog: Sequence[WardrobeItem], occasion: str = "", weather: str = "",
             preferred_color: str = "", rng: Optional[random.Random] = None) -> OutfitSuggestion:
    """Convenience wrapper around ``OutfitGenerator.generate``."""
    return OutfitGenerator(rng=rng).generate(catalog, occasion, weather, preferred_color)
