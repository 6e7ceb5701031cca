"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Blockchain indexer (Covalent-compatible API)
    indexer_api_base: str = "https://api.covalenthq.com"
    indexer_api_key: str = ""
    chain_id: int = 8453  # Base mainnet
    native_symbol: str = "ETH"

    # Metal prices
    price_source: str = "static"  # static | metalpriceapi
    static_gold_usd_per_gram: float = 75.0
    static_silver_usd_per_gram: float = 0.95
    metal_price_api_base: str = "https://api.metalpriceapi.com/v1"
    metal_price_api_key: str = ""

    # Nisab references (grams)
    nisab_gold_grams: float = 85
    nisab_silver_grams: float = 595

    # Classification thresholds (USD)
    dust_threshold_usd: float = 0.50
    crypto_liquidity_threshold_usd: float = 10.0

    # Payment
    payment_token_address: str = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"  # USDC on Base
    payment_token_decimals: int = 6
    zakat_recipient_address: str = "0x1111111111111111111111111111111111111111"

    # Service
    service_name: str = "zakat-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 10.0


settings = Settings()
