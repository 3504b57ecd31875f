import uvicorn
from constants import HOST, PORT, LOG_LEVEL, LOG_FILE, ENVIRONMENT, WS_PING_INTERVAL, WS_PING_TIMEOUT
from logging_config import setup_logging

# Setup logging before importing app
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

from app import app
from logging_config import get_logger

logger = get_logger(__name__)

if __name__ == "__main__":
    logger.info(f"WebRTC Signaling Server running on {HOST}:{PORT}")
    logger.info(f"Health check available at http://localhost:{PORT}/health")
    logger.info(f"Environment: {ENVIRONMENT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        ws_ping_interval=WS_PING_INTERVAL,
        ws_ping_timeout=WS_PING_TIMEOUT,
        log_config=None,
    )
