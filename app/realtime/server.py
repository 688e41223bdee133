import socketio
from app.core.config import settings
from app.core.database import SessionLocal
from app.realtime.handlers import SyncHandlers
from app.realtime.hub import BroadcastHub

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*" if "*" in settings.CORS_ORIGINS else settings.CORS_ORIGINS,
)

hub = BroadcastHub(sio)
handlers = SyncHandlers(hub, SessionLocal)
handlers.register(sio)
