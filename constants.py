import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8080))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Keepalive for idle signaling sockets, in seconds
WS_PING_INTERVAL = float(os.getenv("WS_PING_INTERVAL", 20))
WS_PING_TIMEOUT = float(os.getenv("WS_PING_TIMEOUT", 20))

SERVICE_NAME = "WebRTC Signaling Server"
SERVICE_VERSION = "1.0.0"
