import logging
import random
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, Depends, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.auth import COOKIE_NAME, UserSession, require_session, token_for_user
from wardrobe.config import config
from wardrobe.crud.events import (
    create_event, delete_event, get_events_on, get_upcoming_events, get_user_events,
)
from wardrobe.crud.users import authenticate_user, create_user
from wardrobe.crud.wardrobe import create_item, delete_item, get_user_items, refresh_item_image
from wardrobe.database.connection import get_db, init_db, close_db
from wardrobe.logging_config import configure_logging
from wardrobe.schemas import (
    Category,
    Event,
    EventEnvelope,
    GeneratedOutfit,
    OutfitRequest,
    ShoppingRecommendations,
    TokenResponse,
    User,
    UserCreate,
    UserLogin,
    WardrobeItem,
    WardrobeItemEnvelope,
)
from wardrobe.services import shopping
from wardrobe.services.outfit_generator import OutfitGenerationError, OutfitGenerator
from wardrobe.storage.images import (
    ImageNotFound, ImageStore, ImageStoreError, InvalidSignature, get_image_store,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


def get_outfit_generator() -> OutfitGenerator:
    """Dependency building the generator with the configured jitter source"""
    return OutfitGenerator(rng=random.Random(config.OUTFIT_RANDOM_SEED))


@app.on_event("startup")
async def startup_event():
    configure_logging()
    await init_db()
    logger.info("%s %s started", config.APP_NAME, config.APP_VERSION)


@app.on_event("shutdown")
async def shutdown_event():
    await close_db()
    logger.info("%s stopped", config.APP_NAME)


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# Auth

@app.post("/auth/signup")
async def signup(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        user = await create_user(db, user_data.email, user_data.password, user_data.name)
    except ValueError as e:
        logger.info("Signup rejected for %s: %s", user_data.email, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("User %s signed up", user.id)
    return {"success": True, "user": User.model_validate(user)}


@app.post("/auth/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    access_token = token_for_user(user)
    body = TokenResponse(access_token=access_token, user=User.model_validate(user))
    response = JSONResponse(content=body.model_dump(mode="json"))
    response.set_cookie(
        key=COOKIE_NAME,
        value=access_token,
        httponly=True,
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return response


@app.post("/auth/logout")
async def logout():
    response = JSONResponse(content={"success": True})
    response.delete_cookie(COOKIE_NAME)
    return response


@app.get("/auth/session")
async def current_session(session: UserSession = Depends(require_session)):
    return {"user": {"id": session.user_id, "email": session.email, "name": session.name}}


# Wardrobe

@app.get("/wardrobe")
async def list_wardrobe(
    category: Optional[Category] = None,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    items = await get_user_items(db, session.user_id, category)
    return {"items": [WardrobeItem.from_row(item) for item in items]}


@app.post("/wardrobe")
async def add_wardrobe_item(
    body: WardrobeItemEnvelope,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session),
    image_store: ImageStore = Depends(get_image_store)
):
    try:
        item = await create_item(db, body.item, session.user_id, image_store)
    except ImageStoreError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"success": True, "item": WardrobeItem.from_row(item)}


@app.delete("/wardrobe/{item_id}")
async def remove_wardrobe_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session),
    image_store: ImageStore = Depends(get_image_store)
):
    success = await delete_item(db, item_id, session.user_id, image_store)
    if not success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return {"success": True}


@app.post("/wardrobe/{item_id}/refresh-image")
async def refresh_wardrobe_image(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session),
    image_store: ImageStore = Depends(get_image_store)
):
    url = await refresh_item_image(db, item_id, session.user_id, image_store)
    if url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item or image not found")
    return {"success": True, "image_url": url}


@app.get("/images/{file_name:path}")
async def serve_image(
    file_name: str,
    token: str = Query(...),
    image_store: ImageStore = Depends(get_image_store)
):
    try:
        path = image_store.resolve(file_name, token)
    except InvalidSignature:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired image URL")
    except ImageNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return FileResponse(path)


# Events

@app.get("/events")
async def list_events(
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    events = await get_user_events(db, session.user_id)
    return {"events": [Event.model_validate(event) for event in events]}


@app.get("/events/upcoming")
async def upcoming_events(
    limit: int = Query(config.UPCOMING_EVENTS_LIMIT, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    events = await get_upcoming_events(db, session.user_id, limit=limit)
    return {"events": [Event.model_validate(event) for event in events]}


@app.get("/events/on/{day}")
async def events_on_day(
    day: date,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    events = await get_events_on(db, session.user_id, day)
    return {"events": [Event.model_validate(event) for event in events]}


@app.post("/events")
async def add_event(
    body: EventEnvelope,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    try:
        event = await create_event(db, body.event, session.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"success": True, "event": Event.model_validate(event)}


@app.delete("/events/{event_id}")
async def remove_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    success = await delete_event(db, event_id, session.user_id)
    if not success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return {"success": True}


# Outfits and shopping

@app.post("/outfits/generate", response_model=GeneratedOutfit)
async def generate_outfit(
    request_data: OutfitRequest,
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session),
    generator: OutfitGenerator = Depends(get_outfit_generator)
):
    rows = await get_user_items(db, session.user_id)
    catalog = [WardrobeItem.from_row(row) for row in rows]

    try:
        outfit = generator.generate(
            catalog,
            occasion=request_data.occasion,
            weather=request_data.weather,
            preferred_color=request_data.color,
        )
    except OutfitGenerationError as e:
        logger.info("Outfit generation rejected for user %s: %s", session.user_id, type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": type(e).__name__, "message": str(e)}
        )

    logger.info(
        "Generated outfit for user %s: %d items, %d%% match, missing %s",
        session.user_id, len(outfit.items), outfit.match_percentage, outfit.missing_categories
    )
    return GeneratedOutfit(
        items=outfit.items,
        score=outfit.match_percentage,
        occasion=outfit.occasion,
        weather=outfit.weather,
        dress_color=outfit.preferred_color,
        missing_categories=outfit.missing_categories,
        shopping_links=shopping.links_for_missing(outfit.missing_categories),
    )


@app.get("/shopping/recommendations", response_model=ShoppingRecommendations)
async def shopping_recommendations(
    db: AsyncSession = Depends(get_db),
    session: UserSession = Depends(require_session)
):
    items = await get_user_items(db, session.user_id)
    return shopping.recommend(item.category for item in items)


@app.get("/shopping/search")
async def shopping_search(q: str = "", session: UserSession = Depends(require_session)):
    try:
        url = shopping.search_url(q)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"query": q.strip(), "url": url}


def run():
    import uvicorn
    uvicorn.run(
        app,
        host=config.HOST_URL,
        port=config.HOST_PORT
    )


if __name__ == "__main__":
    run()
