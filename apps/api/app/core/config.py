from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    root_path: str = ""

    postgres_db: str = "membership"
    postgres_user: str = "membership_user"
    postgres_password: str = "membership_pass"
    postgres_host: str = "db"
    postgres_port: int = 5432
    # Full SQLAlchemy URL; takes precedence over the postgres_* fields when set.
    database_url_override: str = ""

    # Upper bound on waiting for the per-account row lock (PostgreSQL only).
    lock_timeout_ms: int = 5000

    log_level: str = "INFO"
    log_format: str = "json"  # json | console

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
