"""Provider credentials."""

import os

from pydantic import BaseModel

ENV_VARS = {
    "gnews": "GNEWS_API_KEY",
    "newsapi": "NEWSAPI_API_KEY",
    "mediastack": "MEDIASTACK_API_KEY",
    "gopher": "GOPHER_API_KEY",
    "claude": "CLAUDE_API_KEY",
    "resend": "RESEND_API_KEY",
}


class Credentials(BaseModel):
    """API keys for the keyed providers. Missing keys are None."""

    gnews: str | None = None
    newsapi: str | None = None
    mediastack: str | None = None
    gopher: str | None = None
    claude: str | None = None
    resend: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "Credentials":
        return cls(**{name: os.environ.get(var) or None for name, var in ENV_VARS.items()})
