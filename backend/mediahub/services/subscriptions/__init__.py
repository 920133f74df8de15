from .dto import ToggleOut
from .service import SubscriptionService

__all__ = ["SubscriptionService", "ToggleOut"]
