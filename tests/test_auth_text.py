"""
Tests for the authentication blurb.
"""

import random

import pytest

from src.core.models.config import AuthConfig
from src.core.services.docs.auth_text import LEAD_INS, auth_sentence, continuation_for


class PickIndex:
    def __init__(self, index: int):
        self.index = index

    def choice(self, seq):
        return seq[self.index]


class TestContinuations:
    """Fixed sentence endings per strategy."""

    def test_query(self):
        assert continuation_for("query", "api_key") == (
            "a query parameter **`api_key`** in the request."
        )

    def test_body(self):
        assert continuation_for("body", "token") == (
            "a parameter **`token`** in the body of the request."
        )

    def test_query_or_body(self):
        assert continuation_for("query_or_body", "key") == (
            "a parameter **`key`** either in the query string or in the request body."
        )

    def test_bearer_ignores_name(self):
        assert continuation_for("bearer", "whatever") == (
            'an **`Authorization`** header with the value **"Bearer {your-token}"**.'
        )

    def test_basic(self):
        text = continuation_for("basic", "key")
        assert text.startswith('an **`Authorization`** header in the form **"Basic {credentials}"**. ')
        assert "base64-encoded" in text
        assert "`{credentials}`" in text

    def test_header(self):
        assert continuation_for("header", "X-Api-Key") == (
            'a **`X-Api-Key`** header with the value **"{your-token}"**.'
        )

    def test_unknown_strategy_is_empty(self):
        assert continuation_for("carrier-pigeon", "key") == ""


class TestAuthSentence:
    """Lead-in + continuation + extra info."""

    def test_disabled(self):
        assert auth_sentence(AuthConfig(enabled=False)) == ""

    @pytest.mark.parametrize("index", range(len(LEAD_INS)))
    def test_every_lead_in(self, index: int):
        auth = AuthConfig.model_validate({"enabled": True, "in": "bearer"})
        text = auth_sentence(auth, PickIndex(index))
        assert text == LEAD_INS[index] + continuation_for("bearer", "key")

    def test_full_bearer_sentence(self):
        auth = AuthConfig.model_validate({"enabled": True, "in": "bearer"})
        assert auth_sentence(auth, PickIndex(0)) == (
            "This API is authenticated by sending an **`Authorization`** header "
            'with the value **"Bearer {your-token}"**.'
        )

    def test_extra_info_appended(self):
        auth = AuthConfig.model_validate({
            "enabled": True,
            "in": "query",
            "name": "api_key",
            "extra_info": "Get a key from your dashboard.",
        })
        text = auth_sentence(auth, PickIndex(1))
        assert text == (
            "To authenticate requests, include a query parameter **`api_key`** "
            "in the request. Get a key from your dashboard."
        )

    def test_unknown_strategy_is_lead_in_only(self):
        auth = AuthConfig.model_validate({"enabled": True, "in": "cookie"})
        assert auth_sentence(auth, PickIndex(2)) == LEAD_INS[2]

    def test_real_rng_picks_a_known_lead_in(self):
        auth = AuthConfig.model_validate({"enabled": True, "in": "header", "name": "X-Token"})
        text = auth_sentence(auth, random.Random(7))
        assert any(text.startswith(lead) for lead in LEAD_INS)
        assert text.endswith('a **`X-Token`** header with the value **"{your-token}"**.')
