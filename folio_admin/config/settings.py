from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    supabase_url: str = "http://localhost:54321"
    supabase_key: str = ""
    http_timeout_seconds: int = 30

    table_backend: str = "postgrest"
    storage_backend: str = "supabase"
    auth_backend: str = "supabase"

    db_host: str = "localhost"
    db_port: int = 54322
    db_database: str = "postgres"
    db_username: str = "postgres"
    db_password: str = "postgres"
    db_pool_max_size: int = 5

    project_images_bucket: str = "project-images"
    doc_images_bucket: str = "doc-images"
    cert_images_bucket: str = "cert-images"
    default_image_extension: str = "png"

    admin_email: str = ""
    dashboard_activity_limit: int = 12
