import logging
from pydantic_settings import BaseSettings
from pydantic import ConfigDict

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)

class Settings(BaseSettings):
    APP_NAME: str = "Training Back Office API"
    COMPANY_NAME: str = "Training Management System"

    # Flat-file storage
    DATA_DIR: str = "./data"

    # Money
    GST_RATE: float = 0.18
    CURRENCY_SYMBOL: str = "₹"
    QUOTATION_VALID_DAYS: int = 30

    # Email (SMTP)
    EMAIL_ENABLED: bool = False
    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_USER: str = ""
    EMAIL_PASSWORD: str = ""
    EMAIL_FROM: str = ""
    EMAIL_USE_TLS: bool = True

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
