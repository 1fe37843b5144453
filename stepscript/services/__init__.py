"""Services and their interfaces."""

from .config_service import ConfigService, MockConfigService
from .interfaces import IPresenter

__all__ = ["ConfigService", "MockConfigService", "IPresenter"]
