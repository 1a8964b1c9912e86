from wardrobe.schemas.users import User, UserCreate, UserLogin, TokenResponse
from wardrobe.schemas.wardrobe import (
    Category,
    Event,
    EventCreate,
    EventEnvelope,
    EventType,
    GeneratedOutfit,
    OutfitRequest,
    ShoppingItem,
    ShoppingLinks,
    ShoppingRecommendations,
    WardrobeItem,
    WardrobeItemCreate,
    WardrobeItemEnvelope,
)
