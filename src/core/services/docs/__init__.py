"""
API documentation writer — regenerate docs without losing manual edits.

Public API::

    from src.core.services.docs import DocsWriter

    writer = DocsWriter(config, project_root, force=False)
    report = writer.write_docs(groups)

Pieces, leaves first:
    - ``render``       attach rendered prose to each route
    - ``conflicts``    has a generated file been edited by hand?
    - ``group_writer`` write or skip each group page
    - ``postman``      the Postman collection snapshot
    - ``auth_text``    the authentication blurb
    - ``writer``       one full run, in order
"""

from src.core.services.docs.conflicts import WriteDecision, decide_write, was_modified_manually
from src.core.services.docs.group_writer import (
    ArtifactResult,
    GroupWriter,
    SlugCollisionError,
    WriteState,
)
from src.core.services.docs.writer import DocsWriter, WriteReport

__all__ = [
    "ArtifactResult",
    "DocsWriter",
    "GroupWriter",
    "SlugCollisionError",
    "WriteDecision",
    "WriteReport",
    "WriteState",
    "decide_write",
    "was_modified_manually",
]
