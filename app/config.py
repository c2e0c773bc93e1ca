from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):

    # Application
    APP_NAME: str = "ES Rent API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:3001"]

    # Database (MongoDB)
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "esrent"

    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Bootstrap super admin, created on startup when both are set
    DEFAULT_ADMIN_EMAIL: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None
    DEFAULT_ADMIN_NAME: str = "Default Admin"

    # Media storage (any S3-compatible bucket)
    MEDIA_BUCKET: Optional[str] = None
    MEDIA_REGION: str = "us-east-1"
    MEDIA_ENDPOINT_URL: Optional[str] = None
    MEDIA_ACCESS_KEY_ID: Optional[str] = None
    MEDIA_SECRET_ACCESS_KEY: Optional[str] = None
    MEDIA_PUBLIC_BASE_URL: Optional[str] = None
    MEDIA_DEFAULT_FOLDER: str = "esrent"

    # Uploads
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024
    UPLOAD_ALLOWED_TYPES: List[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
    ]

    # Video testimonials
    VIDEO_MAX_BYTES: int = 100 * 1024 * 1024
    VIDEO_ALLOWED_TYPES: List[str] = ["video/mp4", "video/webm", "video/quicktime"]
    VIDEO_FOLDER: str = "video-testimonials"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
