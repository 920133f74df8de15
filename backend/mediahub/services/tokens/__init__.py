from .dto import RefreshClaims, TokenConfig, TokenPairOut
from .service import TokenService

__all__ = ["RefreshClaims", "TokenConfig", "TokenPairOut", "TokenService"]
