"""Shopping links and wardrobe gap recommendations."""

from typing import Dict, Iterable, List
from urllib.parse import quote

from wardrobe.config import config
from wardrobe.schemas.wardrobe import ShoppingItem, ShoppingLinks

GAP_FILLER_COUNT = 6

CURATED_ITEMS = [
    ShoppingItem(id="1", name="Classic White Shirt", category="top", price="$29.99",
                 image="https://images.unsplash.com/photo-1596755094514-f87e34085b2c?w=400",
                 store="Fashion Store", link="#", trending=True),
    ShoppingItem(id="2", name="Designer Handbag", category="bags", price="$89.99",
                 image="https://images.unsplash.com/photo-1584917865442-de89df76afd3?w=400",
                 store="Luxury Boutique", link="#", trending=True),
    ShoppingItem(id="3", name="Leather Sneakers", category="shoes", price="$69.99",
                 image="https://images.unsplash.com/photo-1549298916-b41d501d3772?w=400",
                 store="Shoe Palace", link="#", trending=False),
    ShoppingItem(id="4", name="Silk Scarf", category="accessories", price="$24.99",
                 image="https://images.unsplash.com/photo-1601924994987-69e26d50dc26?w=400",
                 store="Accessory Hub", link="#", trending=True),
    ShoppingItem(id="5", name="Denim Jeans", category="bottom", price="$49.99",
                 image="https://images.unsplash.com/photo-1542272604-787c3835535d?w=400",
                 store="Denim Co", link="#", trending=False),
    ShoppingItem(id="6", name="Traditional Kurta", category="traditional", price="$59.99",
                 image="https://images.unsplash.com/photo-1610030469983-98e550d6193c?w=400",
                 store="Ethnic Wear", link="#", trending=True),
    ShoppingItem(id="7", name="Smart Watch", category="watch", price="$199.99",
                 image="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400",
                 store="Tech Store", link="#", trending=True),
    ShoppingItem(id="8", name="Chelsea Boots", category="footwear", price="$79.99",
                 image="https://images.unsplash.com/photo-1608256246200-53e635b5b65f?w=400",
                 store="Boot Emporium", link="#", trending=False),
    ShoppingItem(id="9", name="Blazer Jacket", category="top", price="$99.99",
                 image="https://images.unsplash.com/photo-1507679799987-c73779587ccf?w=400",
                 store="Business Attire", link="#", trending=True),
    ShoppingItem(id="10", name="Gold Necklace", category="accessories", price="$149.99",
                 image="https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?w=400",
                 store="Jewelry Gallery", link="#", trending=False),
]


def shopping_links(name: str, color: str = "") -> ShoppingLinks:
    """Store search links for an item name, optionally narrowed by color."""
    q = quote(f"{name} {color or ''}".strip(), safe="")
    return ShoppingLinks(
        amazon=f"https://www.amazon.in/s?k={q}",
        flipkart=f"https://www.flipkart.com/search?q={q}",
        myntra=f"https://www.myntra.com/{q}",
        ajio=f"https://www.ajio.com/search/?text={q}",
    )


def links_for_missing(missing_categories: Iterable[str]) -> Dict[str, ShoppingLinks]:
    return {category: shopping_links(category) for category in missing_categories}


def search_url(query: str) -> str:
    query = query.strip()
    if not query:
        raise ValueError("Search query is required")
    return f"https://www.google.com/search?tbm=shop&q={quote(query, safe='')}"


def missing_wardrobe_categories(owned_categories: Iterable[str]) -> List[str]:
    owned = set(owned_categories)
    return [category for category in config.CATEGORY_NAMES if category not in owned]


def recommend(owned_categories: Iterable[str]) -> dict:
    """Curated suggestions, items filling a wardrobe gap first.

    The sort is stable, so curated order is kept within each group.
    """
    missing = missing_wardrobe_categories(owned_categories)
    prioritized = sorted(CURATED_ITEMS, key=lambda item: item.category not in missing)
    return {
        "missing_categories": missing,
        "recommendations": prioritized,
        "trending": [item for item in prioritized if item.trending],
        "gap_fillers": prioritized[:GAP_FILLER_COUNT],
    }
