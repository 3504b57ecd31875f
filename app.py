from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from routers.rooms import rooms_router
from registry import room_registry
from signaling import SignalingRouter
from transport import connection_manager
from schemas.signaling import Envelope
from constants import CORS_ORIGINS, LOG_LEVEL, LOG_FILE, SERVICE_NAME, SERVICE_VERSION
from logging_config import get_logger, setup_logging
import json

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)

app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(rooms_router)

signaling_router = SignalingRouter(room_registry, connection_manager)

logger.info("FastAPI application initialized")


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Signaling socket.

    Frames in both directions are JSON objects of the form
    {"event": "<kind>", "data": {...}}. The first frame sent by the server is
    "connected", carrying the connection id other peers use to address this one.
    """
    await websocket.accept()
    connection_id = connection_manager.connect(websocket)
    logger.info(f"New client connected: {connection_id}")

    try:
        await connection_manager.send(connection_id, "connected", {"connectionId": connection_id})

        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(code=message.get("code", 1000))

            raw = message.get("text")
            if raw is None:
                logger.warning(f"Ignoring binary frame from connection {connection_id}")
                continue

            try:
                envelope = Envelope.model_validate(json.loads(raw))
            except (json.JSONDecodeError, RecursionError, ValidationError):
                preview = raw[:100]
                logger.warning(f"Invalid frame from connection {connection_id}. Preview: {preview}")
                continue

            await signaling_router.dispatch(connection_id, envelope.event, envelope.data)

    except WebSocketDisconnect:
        logger.info(f"Client disconnected: {connection_id}")
    except Exception as e:
        logger.error(f"WebSocket error for connection {connection_id}: {e}", exc_info=True)
        try:
            await websocket.close()
        except Exception as close_error:
            logger.debug(f"Error closing WebSocket: {close_error}")
    finally:
        # Registry cleanup must finish before the id is released
        try:
            await signaling_router.handle_disconnect(connection_id)
        finally:
            connection_manager.disconnect(connection_id)
