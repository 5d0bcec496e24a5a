"""
Configuration settings for the Guardian Vision backend
"""
import os
from dotenv import load_dotenv

# Load .env file from project root (parent of guardian directory)
env_path = os.path.join(os.path.dirname(__file__), "..", ".env")
load_dotenv(dotenv_path=env_path, override=True)

# Database Configuration
DATABASE_URL = os.getenv("DATABASE_URL")

# Auth Configuration
JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
MIN_PASSWORD_LENGTH = 6

# Vision Analysis Configuration (OpenAI-compatible chat completions endpoint)
VISION_API_URL = os.getenv("VISION_API_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
VISION_API_KEY = os.getenv("VISION_API_KEY")
VISION_MODEL = os.getenv("VISION_MODEL", "google/gemini-2.5-flash")
VISION_TIMEOUT = float(os.getenv("VISION_TIMEOUT", "30"))

# Notification Providers
RESEND_API_URL = "https://api.resend.com/emails"
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM = os.getenv("EMAIL_FROM", "Emergency Alert <onboarding@resend.dev>")
VONAGE_API_KEY = os.getenv("VONAGE_API_KEY")
VONAGE_API_SECRET = os.getenv("VONAGE_API_SECRET")
VONAGE_FROM_NUMBER = os.getenv("VONAGE_FROM_NUMBER", "GuardianVision")
NOTIFY_TIMEOUT = float(os.getenv("NOTIFY_TIMEOUT", "10"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# Empty string disables the file handler
LOG_FILE = os.getenv("LOG_FILE", "backend.log")

# Allow all origins for development; tighten in production
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Alert listing
DEFAULT_ALERT_LIMIT = 100
MAX_ALERT_LIMIT = 1000

ALERT_STATUSES = ("safe", "warning", "danger")
ALERT_METHODS = ("email", "sms", "push", "call")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
