# WorkHours - Configuration
# Application settings loaded from environment variables

from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Create a .env file in the project root for local development:

        # .env
        WORKHOURS_DB_SERVER=localhost
        WORKHOURS_DB_NAME=workhours
        WORKHOURS_DB_USER=workhours_app
        WORKHOURS_DB_PASSWORD=your_password_here
        WORKHOURS_SECRET_KEY=your-secret-key-change-in-production

    Or skip SQL Server entirely and point at any SQLAlchemy URL:

        WORKHOURS_DB_URL=sqlite:///./workhours.db

    For production, set these as actual environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKHOURS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "WorkHours"
    debug: bool = False
    secret_key: str = "change-me"
    log_level: str = "INFO"

    # IANA zone used for "today" and week bounds; None means server local time
    timezone: Optional[str] = None

    # Explicit SQLAlchemy URL; wins over the SQL Server settings below
    db_url: Optional[str] = None

    # Database - SQL Server connection
    db_server: str = "localhost"
    db_port: int = 1433
    db_name: str = "workhours"
    db_user: str = "workhours_app"
    db_password: str = "workhours_password"

    # Optional: Schema for all tables (e.g., "hr")
    # If not set, the connection's default schema is used
    db_schema: Optional[str] = None

    # Use Windows Authentication instead of SQL auth
    db_trusted_connection: bool = False

    # Connection pool settings
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800  # Recycle connections after 30 min

    # Session settings
    session_expire_minutes: int = 480  # 8 hours

    # Scheduled auto-approval cadence
    auto_approve_interval_minutes: int = 60

    @property
    def database_url(self) -> str:
        """
        Build the SQLAlchemy connection URL.

        Uses db_url when given, otherwise pyodbc with ODBC Driver 17
        for SQL Server.
        """
        if self.db_url:
            return self.db_url

        if self.db_trusted_connection:
            # Windows Authentication
            connection_string = (
                f"DRIVER={{ODBC Driver 17 for SQL Server}};"
                f"SERVER={self.db_server},{self.db_port};"
                f"DATABASE={self.db_name};"
                f"Trusted_Connection=yes;"
            )
        else:
            # SQL Server Authentication
            connection_string = (
                f"DRIVER={{ODBC Driver 17 for SQL Server}};"
                f"SERVER={self.db_server},{self.db_port};"
                f"DATABASE={self.db_name};"
                f"UID={self.db_user};"
                f"PWD={self.db_password};"
            )

        return f"mssql+pyodbc:///?odbc_connect={quote_plus(connection_string)}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once.
    """
    return Settings()
