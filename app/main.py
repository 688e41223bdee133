import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.database import SessionLocal
from app.core.exceptions import TripSyncError
from app.core.init_db import ensure_default_trip, init_db
from app.core.logger import logger
from app.core.redis_lifecycle import close_redis, get_cache_instance
from app.realtime.server import handlers, sio
from app.routes import api_router
from app.services.places.place_lookup import build_place_lookup

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url=f"/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(TripSyncError)
async def trip_sync_error_handler(request: Request, exc: TripSyncError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": "Welcome to the Trip Sync API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup_event():
    await init_db()
    async with SessionLocal() as db:
        await ensure_default_trip(db, settings.DEFAULT_TRIP_ID)
    handlers.use_place_lookup(build_place_lookup(await get_cache_instance()))
    logger.info(f"🌺 {settings.PROJECT_NAME} ready, sharing trip {settings.DEFAULT_TRIP_ID}")

@app.on_event("shutdown")
async def shutdown_event():
    await close_redis()


# Socket.IO in front, everything else falls through to FastAPI
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)
