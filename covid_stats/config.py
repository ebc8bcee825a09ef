from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of covid_stats directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""
    
    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True
    
    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    
    # Remote provider (disease.sh)
    DISEASE_API_BASE_URL: str = "https://disease.sh/v3/covid-19"
    DISEASE_API_TIMEOUT: float = 10.0
    
    # Country list freshness window, epoch milliseconds
    CACHE_DURATION_MS: int = 3_600_000
    
    # Storage settings
    STORAGE_TYPE: str = "filesystem"  # "filesystem", "memory" or "s3"
    CACHE_STORAGE_DIR: str = str(REPO_ROOT / "storage" / "cache")
    
    # S3 settings (only used if STORAGE_TYPE = "s3")
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    S3_BUCKET: str = "covid-stats-cache"
    S3_PREFIX: str = "cache/"
    
    # Connectivity probe
    CONNECTIVITY_CHECK_URL: str = "https://disease.sh/v3/covid-19/all"
    CONNECTIVITY_TIMEOUT: float = 3.0
    FORCE_OFFLINE: bool = False
    
    class Config:
        env_file = ".env"

settings = Settings() 
