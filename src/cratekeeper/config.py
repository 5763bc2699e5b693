# ABOUTME: Runtime configuration for marketplace access.
# ABOUTME: Endpoints, credential, and identity strings, overridable from the environment.

import os
from collections.abc import Mapping
from dataclasses import dataclass

DISCOGS_API_BASE = "https://api.discogs.com"
DISCOGS_WEB_BASE = "https://www.discogs.com"

API_USER_AGENT = "cratekeeper/0.1.0"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "ja,en-US;q=0.9,en;q=0.8"

TOKEN_ENV = "DISCOGS_TOKEN"
API_BASE_ENV = "CRATEKEEPER_API_BASE"
WEB_BASE_ENV = "CRATEKEEPER_WEB_BASE"


@dataclass(frozen=True)
class MarketplaceSettings:
    """Where and how to talk to the marketplace.

    The token is optional here; operations that need it raise
    MissingCredential at call time rather than at construction.
    """

    token: str | None = None
    api_base: str = DISCOGS_API_BASE
    web_base: str = DISCOGS_WEB_BASE
    user_agent: str = API_USER_AGENT
    browser_user_agent: str = BROWSER_USER_AGENT
    accept_language: str = ACCEPT_LANGUAGE
    timeout: float = 30.0
    max_retries: int = 2

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: object
    ) -> "MarketplaceSettings":
        """Build settings from environment variables.

        Blank values are treated as unset. Keyword overrides that are not
        None take precedence over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        token = env.get(TOKEN_ENV, "").strip()
        if token:
            values["token"] = token
        api_base = env.get(API_BASE_ENV, "").strip()
        if api_base:
            values["api_base"] = api_base.rstrip("/")
        web_base = env.get(WEB_BASE_ENV, "").strip()
        if web_base:
            values["web_base"] = web_base.rstrip("/")

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
