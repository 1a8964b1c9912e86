from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["top", "bottom", "traditional", "footwear", "bags", "watch", "shoes", "accessories"]
EventType = Literal["casual", "formal", "party", "festival", "work", "sport"]


class WardrobeItemBase(BaseModel):
    category: Category
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(default="", max_length=50)
    style: str = Field(default="", max_length=50)
    season: List[str] = []
    occasions: List[str] = []
    image: str = ""


class WardrobeItemCreate(WardrobeItemBase):
    pass


class WardrobeItem(WardrobeItemBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    image_file_name: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "WardrobeItem":
        return cls(
            id=row.id,
            category=row.category,
            name=row.name,
            color=row.color,
            style=row.style,
            season=list(row.seasons or []),
            occasions=list(row.occasions or []),
            image=row.image,
            image_file_name=row.image_file_name,
        )


class WardrobeItemEnvelope(BaseModel):
    item: WardrobeItemCreate


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    date: datetime
    type: EventType = "casual"
    description: Optional[str] = None


class EventCreate(EventBase):
    pass


class Event(EventBase):
    model_config = ConfigDict(from_attributes=True)

    id: str


class EventEnvelope(BaseModel):
    event: EventCreate


class OutfitRequest(BaseModel):
    occasion: str = ""
    weather: str = ""
    color: str = ""


class ShoppingLinks(BaseModel):
    amazon: str
    flipkart: str
    myntra: str
    ajio: str


class GeneratedOutfit(BaseModel):
    items: List[WardrobeItem]
    score: int
    occasion: str
    weather: str
    dress_color: str
    missing_categories: List[str]
    shopping_links: Dict[str, ShoppingLinks] = {}


class ShoppingItem(BaseModel):
    id: str
    name: str
    category: Category
    price: str
    image: str
    store: str
    link: str
    trending: bool


class ShoppingRecommendations(BaseModel):
    missing_categories: List[str]
    recommendations: List[ShoppingItem]
    trending: List[ShoppingItem]
    gap_fillers: List[ShoppingItem]
