import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./traffic_reports.db")
API_PREFIX = os.getenv("API_PREFIX", "/api")

# Media uploads
UPLOAD_DIR = os.path.abspath(os.getenv("UPLOAD_DIR", "uploads"))
UPLOAD_URL_PREFIX = "/uploads"
MAX_MEDIA_FILES = int(os.getenv("MAX_MEDIA_FILES", "5"))

# Auth
OTP_LENGTH = 6
OTP_EXPIRY_MINUTES = int(os.getenv("OTP_EXPIRY_MINUTES", "10"))
TOKEN_EXPIRY_HOURS = int(os.getenv("TOKEN_EXPIRY_HOURS", "24"))

# Abuse safeguards, counted per client IP
OTP_RATE_LIMIT = int(os.getenv("OTP_RATE_LIMIT", "5"))
REPORT_RATE_LIMIT = int(os.getenv("REPORT_RATE_LIMIT", "20"))
RATE_LIMIT_WINDOW_MINUTES = int(os.getenv("RATE_LIMIT_WINDOW_MINUTES", "15"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
WEB_CLIENT_DIR = os.getenv("WEB_CLIENT_DIR")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")]

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
