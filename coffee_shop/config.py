from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./coffee_shop.db"
    access_key: str | None = None
    allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    log_level: str = "INFO"

    tax_rate: float = Field(default=0.08, ge=0)
    # Accrual rate for completed orders; loyalty point value is the redemption side.
    loyalty_points_per_dollar: float = Field(default=10.0, ge=0)
    loyalty_point_value: float = Field(default=0.01, gt=0)

    payment_gateway_url: str | None = None
    payment_gateway_timeout: float = 5.0
    simulated_success_rate: float = Field(default=1.0, ge=0, le=1)

    seed_sample_data: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "COFFEE_SHOP_"

    @field_validator("allow_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if value is None:
            return []
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
