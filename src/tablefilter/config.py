from functools import cache
from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Filter engine configuration loaded from environment variables."""

    debug: bool = False
    default_strategy: Literal["client", "server"] = "client"  # Strategy used when the caller does not pick one
    query_param: str = "filters"  # URL search parameter that carries the serialized filter state

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TABLEFILTER_",
        "extra": "ignore",
    }


@cache
def get_config() -> Config:
    return Config()
