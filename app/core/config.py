import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

APP_TITLE = os.getenv("APP_TITLE", "SkillSwap Backend")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./skillswap.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Comma separated, "*" allows everything
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

MAX_MESSAGE_LENGTH = int(os.getenv("MAX_MESSAGE_LENGTH", "1000"))
