"""
Cross-origin policy - chosen once at startup from the deployment mode.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "Accept"]


@dataclass(frozen=True)
class CorsPolicy:
    allow_origins: List[str]
    allow_credentials: bool = True
    allow_methods: List[str] = field(default_factory=lambda: list(ALLOWED_METHODS))
    allow_headers: List[str] = field(default_factory=lambda: list(ALLOWED_HEADERS))

    @property
    def allows_any_origin(self) -> bool:
        return "*" in self.allow_origins

    def summary(self) -> Dict[str, Any]:
        return {
            "origins": "*" if self.allows_any_origin else list(self.allow_origins),
            "methods": list(self.allow_methods),
            "headers": list(self.allow_headers),
            "credentials": self.allow_credentials,
        }

    def install(self, app: FastAPI) -> None:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self.allow_origins,
            allow_credentials=self.allow_credentials,
            allow_methods=self.allow_methods,
            allow_headers=self.allow_headers,
        )


def select_cors_policy(settings: Settings) -> CorsPolicy:
    """Wildcard origins in development, the ALLOWED_ORIGINS list in production."""
    if not settings.is_production:
        return CorsPolicy(allow_origins=["*"])

    origins = settings.allowed_origins
    if not origins:
        logger.warning("ALLOWED_ORIGINS is empty: browsers will not be able to call this API cross-origin")
    elif "*" in origins:
        logger.warning("CORS is set to allow all origins. This is not recommended for production.")
    return CorsPolicy(allow_origins=origins)
