"""FastAPI dependency injection."""

from functools import lru_cache

from cardwise.data.narrative import AdviceService, build_client


@lru_cache(maxsize=1)
def get_advice_service() -> AdviceService:
    return AdviceService(build_client())
