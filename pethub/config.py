import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./pethub.db")

# Session JWTs are issued by the hosted auth platform and signed with its JWT secret
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")

# Frontend base URL (used for CORS defaults)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:3000").split(",")
    if origin.strip()
]

# Barcode lookup providers
# Open Food Facts is free and needs no key; Barcode Lookup is paid and optional
OPEN_FOOD_FACTS_BASE_URL = os.getenv("OPEN_FOOD_FACTS_BASE_URL", "https://world.openfoodfacts.org")
OPEN_FOOD_FACTS_USER_AGENT = os.getenv(
    "OPEN_FOOD_FACTS_USER_AGENT", "PetHub-Inventory/1.0 (Inventory barcode lookup)"
)
BARCODE_LOOKUP_BASE_URL = os.getenv("BARCODE_LOOKUP_BASE_URL", "https://api.barcodelookup.com")
BARCODE_LOOKUP_API_KEY = os.getenv("BARCODE_LOOKUP_API_KEY")
BARCODE_LOOKUP_TIMEOUT_SECONDS = float(os.getenv("BARCODE_LOOKUP_TIMEOUT_SECONDS", "10"))
BARCODE_RATE_LIMIT_PER_MINUTE = int(os.getenv("BARCODE_RATE_LIMIT_PER_MINUTE", "60"))

# Optional shared store for rate limiting across processes
REDIS_URL = os.getenv("REDIS_URL")

# Day view calendar
DEFAULT_DAY_START_HOUR = int(os.getenv("DEFAULT_DAY_START_HOUR", "7"))
DEFAULT_DAY_END_HOUR = int(os.getenv("DEFAULT_DAY_END_HOUR", "20"))
CALENDAR_ROW_HEIGHT_PX = int(os.getenv("CALENDAR_ROW_HEIGHT_PX", "80"))

# Invoice defaults when the business has no phone/address on file
DEFAULT_BUSINESS_PHONE = os.getenv("DEFAULT_BUSINESS_PHONE", "(787) 555-5555")
DEFAULT_BUSINESS_ADDRESS = os.getenv("DEFAULT_BUSINESS_ADDRESS", "Trujillo Alto, Puerto Rico")

# Inventory: products without their own reorder level use this threshold
DEFAULT_LOW_STOCK_THRESHOLD = int(os.getenv("DEFAULT_LOW_STOCK_THRESHOLD", "5"))
