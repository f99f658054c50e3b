"""Result shapes handed back to the host build tool."""

from pydantic import BaseModel
from pydantic import Field


class Message(BaseModel):
    """A diagnostic attached to a resolve result."""

    text: str


class ResolveResult(BaseModel):
    """Answer to a resolve hook call.

    Either ``external`` is set (left for the runtime, possibly with
    diagnostics) or ``namespace``/``path`` name the resolved module.
    """

    external: bool = False
    namespace: str | None = None
    path: str | None = None
    errors: list[Message] = Field(default_factory=list)
    warnings: list[Message] = Field(default_factory=list)
    watch_files: list[str] = Field(default_factory=list)


class LoadResult(BaseModel):
    """Answer to a load hook call."""

    contents: bytes
    loader: str = "default"
    resolve_dir: str | None = None


__all__ = ["Message", "ResolveResult", "LoadResult"]
