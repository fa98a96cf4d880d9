from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./storefront.db"

    # JWT verification (tokens are issued by the auth service)
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"

    # Session cookies
    ACCESS_TOKEN_COOKIE: str = "accessToken"
    REFRESH_TOKEN_COOKIE: str = "refreshToken"

    # Shop Configuration
    SHOP_NAME: str = "Marketplace"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
