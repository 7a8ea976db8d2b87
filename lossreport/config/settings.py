from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    storage_backend: str = "file"
    registry_path: str = "data/registry.json"
    registry_key: str = "imported_files"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "lossreport"
    db_username: str = "lossreport"
    db_password: str = "secret"

    csv_encoding: str = "utf-8-sig"
    export_csv_encoding: str = "utf-8-sig"

    sort_collation: str = "casefold"
    sort_locale: str = "pt_BR"
    default_page_size: int = 50
    top_deviations_limit: int = 10

    login_max_failures: int = 3
    login_lockout_seconds: int = 30
