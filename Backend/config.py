import os
from dotenv import load_dotenv

# ✅ LOAD ENV FIRST
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

# Comma separated list, "*" allows every origin (DEV only)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Bearer sessions
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "168"))

# Geocoding (Nominatim)
GEOCODING_ENABLED = os.getenv("GEOCODING_ENABLED", "true").lower() in ("1", "true", "yes")
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "NYC-Gap-Finder/1.0")
GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "5"))
NEIGHBORHOOD_MATCH_RADIUS = float(os.getenv("NEIGHBORHOOD_MATCH_RADIUS", "2500"))  # meters
