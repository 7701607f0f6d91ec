from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Service
    service_name: str = "certhub"
    debug: bool = False

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "certhub"
    db_user: str = "dbadmin"
    db_password: str = ""

    # Certificates
    timezone: str = "Asia/Jakarta"  # Local time for identifiers and validity
    number_generation_max_attempts: int = 50

    # Authentication
    auth_enabled: bool = False  # Disable in development
    firebase_project_id: str | None = None
    admin_roles: list[str] = ["admin", "superadmin"]

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
