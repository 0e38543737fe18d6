"""Pydantic models for resolved input sources.

A resolved source is inert data: producing, inspecting or serializing one
never touches the filesystem or standard input.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# =============================================================================
# SOURCE MODELS
# =============================================================================


class StdinSource(BaseModel):
    """Read from the process's standard input."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["stdin"] = "stdin"


class FileSource(BaseModel):
    """Read from a named file. The path is kept exactly as typed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    path: str


class TextSource(BaseModel):
    """Use the captured text itself as the payload."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    content: str


ResolvedSource = Annotated[
    Union[StdinSource, FileSource, TextSource],
    Field(discriminator="kind"),
]

_SOURCE_ADAPTER: TypeAdapter[ResolvedSource] = TypeAdapter(ResolvedSource)


# =============================================================================
# SERIALIZATION
# =============================================================================


def dump_source(source: StdinSource | FileSource | TextSource) -> str:
    """Serialize a resolved source to JSON."""
    return source.model_dump_json()


def load_source(data: str | bytes) -> StdinSource | FileSource | TextSource:
    """Deserialize a resolved source from JSON, dispatching on its kind tag."""
    return _SOURCE_ADAPTER.validate_json(data)
