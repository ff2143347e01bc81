from pydantic_settings import BaseSettings

from zacgt import __version__


class Settings(BaseSettings):
    app_name: str = "ZA Crypto CGT"
    version: str = __version__
    debug: bool = False
    cors_origins: list[str] = ["*"]
    min_input_length: int = 10  # Shortest pasted ledger the API accepts
    min_tax_year: int = 2000
    max_tax_year: int = 2100
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "ZACGT_"


settings = Settings()
