from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./taskdeck.db")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_ALGORITHM = getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "15"))  # access token: 15 minutes
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # refresh token: 30 jours
    PASSWORD_MIN_LENGTH = int(getenv("PASSWORD_MIN_LENGTH", "6"))
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
