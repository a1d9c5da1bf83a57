"""
Documentation config model — loaded from docs.yml.

This is the explicit configuration object handed to every component of
the writer. Nothing in the core reads configuration from anywhere else.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

AuthStrategy = Literal["query", "body", "query_or_body", "bearer", "basic", "header"]


class AuthConfig(BaseModel):
    """How API consumers authenticate."""

    enabled: bool = False
    in_: str = Field(default="bearer", alias="in")   # one of AuthStrategy; unknown values allowed
    name: str = "key"                                  # query/body/header parameter name
    extra_info: str = ""

    model_config = {"populate_by_name": True}


class PostmanConfig(BaseModel):
    """Postman collection output."""

    enabled: bool = False
    description: str = ""


class OutputPaths(BaseModel):
    """Where artifacts land, relative to the project root."""

    source_dir: str = "resources/docs"
    static_dir: str = "public/docs"
    integrated_collection_dir: str = "storage/app/docs"


class DocsConfig(BaseModel):
    """Root documentation config.

    ``type`` decides where the collection snapshot goes: ``static`` docs
    keep it next to the built site, ``integrated`` docs keep it in the
    host application's storage directory.
    """

    title: str = "API Documentation"
    intro_text: str = ""
    base_url: str = "http://localhost"
    type: Literal["static", "integrated"] = "static"
    example_languages: list[str] = Field(default_factory=lambda: ["bash", "javascript"])
    logo: str | None = None

    auth: AuthConfig = Field(default_factory=AuthConfig)
    postman: PostmanConfig = Field(default_factory=PostmanConfig)
    output: OutputPaths = Field(default_factory=OutputPaths)

    @property
    def is_static(self) -> bool:
        return self.type == "static"

    @property
    def ledger_path(self) -> str:
        """Sentinel file holding the modification ledger."""
        return f"{self.output.source_dir}/.filemtimes"

    @property
    def collection_path(self) -> str:
        """Where the Postman collection is written."""
        base = self.output.static_dir if self.is_static else self.output.integrated_collection_dir
        return f"{base}/collection.json"

    def render_settings(self) -> dict:
        """Global settings passed to every template."""
        return {
            "languages": list(self.example_languages),
            "logo": self.logo,
            "title": self.title,
        }
