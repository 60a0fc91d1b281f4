from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings object.
    Production reads env vars; locally you can use backend/.env.
    Provider keys live here only, never in responses.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Provider API keys (empty = not configured)
    GO_UPC_API_KEY: str = ""
    UPCITEMDB_API_KEY: str = ""

    # Provider hosts
    GO_UPC_BASE_URL: str = "https://go-upc.com"
    UPCITEMDB_BASE_URL: str = "https://api.upcitemdb.com"
    OPENFOODFACTS_BASE_URL: str = "https://world.openfoodfacts.org"

    # Each provider call is bounded by this
    PROVIDER_TIMEOUT_SECONDS: float = 10.0
    USER_AGENT: str = "UPCLookup/1.0"

    # Shared secret between the auth gateway and this service (empty = every caller rejected)
    GATEWAY_TOKEN: str = ""

    # Forwarding proxy for direct-context lookups (dev only)
    DEV_PROXY_ENABLED: bool = False

    LOG_LEVEL: str = "INFO"

    # Versioning
    APP_VERSION: str = "1.0.0"
    BUILD_ID: str = "dev"


# other modules import this
settings = Settings()
