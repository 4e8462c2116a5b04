"""
Application settings, read from the environment (and a local .env)
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import ClassVar, List, Optional, Tuple


class Settings(BaseSettings):
    """API settings; DATABASE_URL and JWT_SECRET are required at startup"""

    # API Settings
    API_TITLE: str = "API TechChallengeFase3"
    API_VERSION: str = "v1"
    API_DESCRIPTION: str = "API de clientes, produtos, pedidos e pagamentos"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Environment name (ASPNETCORE_ENVIRONMENT is accepted for older deployments)
    APP_ENVIRONMENT: str = Field(
        "development",
        validation_alias=AliasChoices("APP_ENVIRONMENT", "ASPNETCORE_ENVIRONMENT"),
    )
    LOG_LEVEL: str = "INFO"

    # Required at startup, checked by validate_environment_variables()
    DATABASE_URL: str = ""
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"

    # Seconds psycopg2 waits for a connection before giving up
    DATABASE_CONNECT_TIMEOUT: int = 10

    # Create tables on startup (local/dev databases only)
    AUTO_CREATE_SCHEMA: bool = False

    # Routing
    USE_PREFIX_PATH: bool = True
    PREFIX_PATH: str = "/fiap"

    # Localization - comma-separated list, e.g. "pt-BR,en-US"
    DEFAULT_CULTURE: str = "pt-BR"
    SUPPORTED_CULTURES: Optional[str] = "pt-BR"

    # Middleware
    GZIP_MINIMUM_SIZE: int = 500
    HTTPS_REDIRECT: bool = False
    ENABLE_EXCEPTION_MIDDLEWARE: bool = False

    # Mercado Pago
    MERCADOPAGO_ACCESS_TOKEN: str = ""
    MERCADOPAGO_BASE_URL: str = "https://api.mercadopago.com"
    MERCADOPAGO_TIMEOUT: float = 30.0

    REQUIRED_VARIABLES: ClassVar[Tuple[str, ...]] = ("DATABASE_URL", "JWT_SECRET")

    @property
    def prefix_path(self) -> str:
        """Path prefix applied to every route ('' when disabled)"""
        prefix = self.PREFIX_PATH.strip("/")
        if not self.USE_PREFIX_PATH or not prefix:
            return ""
        return f"/{prefix}"

    def get_supported_cultures(self) -> List[str]:
        """Parse SUPPORTED_CULTURES string into list (default culture always included)"""
        cultures = []
        if self.SUPPORTED_CULTURES:
            cultures = [c.strip() for c in self.SUPPORTED_CULTURES.split(",") if c.strip()]
        if self.DEFAULT_CULTURE not in cultures:
            cultures.insert(0, self.DEFAULT_CULTURE)
        return cultures

    def missing_variables(self) -> List[str]:
        """Names of required variables that are not set"""
        return [name for name in self.REQUIRED_VARIABLES if not getattr(self, name)]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
