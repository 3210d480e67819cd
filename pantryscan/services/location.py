import logging

from pydantic import ValidationError

from pantryscan.database import get_config, set_config
from pantryscan.models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_KEY = "app_config"


async def get_app_config() -> AppConfig:
    raw = await get_config(CONFIG_KEY)
    if not raw:
        return AppConfig()
    try:
        return AppConfig.model_validate_json(raw)
    except ValidationError as e:
        # Unreadable row: fall back to defaults, the next save overwrites it
        logger.warning("Ignoring stored %s (%d errors)", CONFIG_KEY, e.error_count())
        return AppConfig()


async def set_postal_code(postal_code: str) -> AppConfig:
    """Remember *postal_code* as the store-search fallback.

    A blank value clears it, so product lookups without a location stop
    at identity only.
    """
    config = await get_app_config()
    config.postal_code = postal_code.strip() or None
    await set_config(CONFIG_KEY, config.model_dump_json())
    logger.info("Default location %s", config.postal_code or "cleared")
    return config


async def get_default_location() -> str | None:
    return (await get_app_config()).postal_code
