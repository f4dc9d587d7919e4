"""
Color Analyzer Configuration
Manages environment variables and defaults for the processing service and client.
"""
import os
from typing import List, Literal

from dotenv import load_dotenv

# Pick up a local .env before the class attributes below are evaluated
load_dotenv()


class Config:
    """Configuration class for Color Analyzer services."""
    
    # Processing backend
    PROCESSOR: Literal["local", "mock"] = os.environ.get("COLOR_ANALYZER_PROCESSOR", "local")
    
    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("COLOR_ANALYZER_MAX_FILE_MB", "10"))
    
    # Color extraction defaults
    MAX_EDGE: int = int(os.environ.get("COLOR_ANALYZER_MAX_EDGE", "256"))
    MAX_SAMPLES: int = int(os.environ.get("COLOR_ANALYZER_MAX_SAMPLES", "20000"))
    PALETTE_SIZE: int = int(os.environ.get("COLOR_ANALYZER_PALETTE_SIZE", "8"))
    RNG_SEED: int = int(os.environ.get("COLOR_ANALYZER_RNG_SEED", "42"))
    
    # Mock processor delays (milliseconds)
    MOCK_ANALYZE_DELAY_MS: int = int(os.environ.get("COLOR_ANALYZER_MOCK_ANALYZE_DELAY_MS", "2000"))
    MOCK_FILTER_DELAY_MS: int = int(os.environ.get("COLOR_ANALYZER_MOCK_FILTER_DELAY_MS", "2500"))
    
    # Logging
    LOG_LEVEL: str = os.environ.get("COLOR_ANALYZER_LOG_LEVEL", "INFO")
    
    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "COLOR_ANALYZER_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    )
    
    # Server binding
    HOST: str = os.environ.get("COLOR_ANALYZER_HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("COLOR_ANALYZER_PORT", "3333"))
    
    # Client settings
    API_URL: str = os.environ.get("COLOR_ANALYZER_API_URL", "http://localhost:3333")
    CLIENT_TIMEOUT: float = float(os.environ.get("COLOR_ANALYZER_CLIENT_TIMEOUT", "30"))
    
    # Accepted uploads: any image/* type PIL can decode
    ACCEPTED_MIME_PREFIX = "image/"
    
    @classmethod
    def validate_processor(cls, processor: str) -> bool:
        """Validate processor name."""
        return processor in ["local", "mock"]
    
    @classmethod
    def validate_palette_size(cls, k: int) -> bool:
        """Validate number of palette colors."""
        return 1 <= k <= 32
    
    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter."""
        return 16 <= max_edge <= 4096
    
    @classmethod
    def allowed_origins(cls) -> List[str]:
        """Split the comma separated CORS origins."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
