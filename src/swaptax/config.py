from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "swaptax"
    birdeye_api_key: str = ""
    fx_rate_url: str = "https://api.exchangerate-api.com/v4/latest/USD"
    local_currency: str = "IDR"
    fx_fallback_rate: Decimal = Decimal("15500")  # Approximate USD/IDR when the rate service is down
    buy_tax_rate: Decimal = Decimal("0.0022")  # PPN on purchases via unregistered exchanges
    sell_tax_rate: Decimal = Decimal("0.002")  # PPh final on sales via unregistered exchanges
    price_cache_window_hours: int = 3
    price_batch_size: int = 5
    price_batch_pause_seconds: float = 0.2
    http_rate_per_second: float = 10.0
    http_timeout: float = 15.0
    debug: bool = False

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
