from app.config import get_settings
from app.providers.base import EventStreamProvider
from app.providers.partner import PartnerStreamProvider


def get_provider() -> EventStreamProvider:
    """
    Provider loader / factory.

    Reads PROVIDER from config and returns an instance of the selected provider.
    This is the single place that knows about concrete providers.
    """
    settings = get_settings()
    provider_name = settings.provider.strip().upper()

    if provider_name == "PARTNER":
        return PartnerStreamProvider(base_url=settings.partner_ws_url)

    raise ValueError(f"Unknown PROVIDER='{settings.provider}'. Expected: PARTNER")
