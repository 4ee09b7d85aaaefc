from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Core
    app_name: str = "Paceon User Cache API"
    environment: str = "development"

    # Supabase (service role bypasses RLS; server-side only)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = "dev-insecure-jwt-secret"  # override in production
    supabase_jwt_audience: str = "authenticated"
    profiles_table: str = "users_profile"

    # Profile / role caches
    cache_ttl_seconds: float = 300
    cache_sweep_interval_seconds: float = 60
    cache_max_items: Optional[int] = None

    # Roles and fallbacks
    default_role: str = "user"
    admin_role: str = "admin"
    placeholder_display_name: str = "Unknown User"

    # Rate limiting
    rate_limit_default: str = "200/minute"

    # CORS
    cors_allow_origins: str = "http://localhost:3000,http://localhost:3001"
    cors_allow_methods: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: List[str] = ["*"]

    # Logging
    log_json: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
