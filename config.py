import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file for local development
load_dotenv()

logger = logging.getLogger(__name__)

class Config:
    """
    Configuration management.
    Centralizes all environment variables; the oracle credential is handed
    to the adapter explicitly instead of being read at import time.
    """
    # --- Scoring Oracle ---
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.2"))

    # --- Server Configuration ---
    ENVIRONMENT = os.getenv("ENVIRONMENT", "production")
    PORT = int(os.getenv("PORT", "5000"))
    HOST = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "info")

    # --- Security ---
    # Set this to your frontend URL in production
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").strip()

    # --- Constraints ---
    FILE_SIZE_LIMIT = int(os.getenv("FILE_SIZE_LIMIT", str(1024 * 1024)))  # 1MB default

    # --- Timeout Settings (Seconds) ---
    ORACLE_TIMEOUT = float(os.getenv("ORACLE_TIMEOUT", "120"))

    @classmethod
    def validate(cls):
        """
        Checks the environment and logs what is missing.
        A missing OPENAI_API_KEY is not fatal here: it surfaces as a
        configuration error on the first analysis request.
        """
        warnings = []

        if not cls.OPENAI_API_KEY:
            warnings.append("OPENAI_API_KEY not set - /api/analyze will fail with a configuration error")

        if cls.ENVIRONMENT == "production":
            if not cls.ALLOWED_ORIGINS or cls.ALLOWED_ORIGINS == "*":
                warnings.append("ALLOWED_ORIGINS not set or set to '*' - CORS is wide open!")

        for warning in warnings:
            logger.warning(f"⚠️  {warning}")

        logger.info(f"✅ Configuration loaded")
        logger.info(f"   Environment: {cls.ENVIRONMENT}")
        logger.info(f"   Port: {cls.PORT}")
        logger.info(f"   Model: {cls.OPENAI_MODEL}")
        logger.info(f"   Oracle Timeout: {cls.ORACLE_TIMEOUT}s")

        return not warnings

    @classmethod
    def get_cors_origins(cls):
        """Parse ALLOWED_ORIGINS into a list"""
        if not cls.ALLOWED_ORIGINS or cls.ALLOWED_ORIGINS == "*":
            if cls.ENVIRONMENT == "production":
                logger.warning("⚠️  Using wildcard CORS in production!")
            return ["*"]

        # Split by comma and clean whitespace
        origins = [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",")]
        origins = [origin for origin in origins if origin]

        return origins if origins else ["*"]

# Global instance
config = Config()
