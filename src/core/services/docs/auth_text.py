"""
Authentication blurb for the generated docs.

One sentence: a lead-in picked at random, then a fixed continuation for
the configured strategy, then any extra text from the config.
"""

from __future__ import annotations

import random
from typing import Protocol, Sequence

from src.core.models.config import AuthConfig

LEAD_INS: tuple[str, ...] = (
    "This API is authenticated by sending ",
    "To authenticate requests, include ",
    "Authenticate requests to this API's endpoints by sending ",
)

_CONTINUATIONS: dict[str, str] = {
    "query": "a query parameter **`{name}`** in the request.",
    "body": "a parameter **`{name}`** in the body of the request.",
    "query_or_body": "a parameter **`{name}`** either in the query string or in the request body.",
    "bearer": 'an **`Authorization`** header with the value **"Bearer {{your-token}}"**.',
    "basic": (
        'an **`Authorization`** header in the form **"Basic {{credentials}}"**. '
        "The value of `{{credentials}}` should be your username/id and your password, "
        "joined with a colon (:), and then base64-encoded."
    ),
    "header": 'a **`{name}`** header with the value **"{{your-token}}"**.',
}


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


def continuation_for(strategy: str, name: str) -> str:
    """Fixed sentence ending for ``strategy``; empty for unknown strategies."""
    template = _CONTINUATIONS.get(strategy)
    if template is None:
        return ""
    return template.format(name=name)


def auth_sentence(auth: AuthConfig, rng: RandomSource | None = None) -> str:
    """Describe how to authenticate, or return ``""`` when auth is off."""
    if not auth.enabled:
        return ""

    rng = rng or random.Random()
    text = rng.choice(LEAD_INS) + continuation_for(auth.in_, auth.name)
    if auth.extra_info:
        text += f" {auth.extra_info}"
    return text
