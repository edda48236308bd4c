import os
from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Peer services
# ---------------------------------------------------------------------------
RATING_SERVICE_URL = os.getenv("RATING_SERVICE_URL", "http://rating-service:8083")
HOTEL_SERVICE_URL = os.getenv("HOTEL_SERVICE_URL", "http://hotel-service:8082")

# Every outbound call blocks for at most this long before it counts as a fault
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "5"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
