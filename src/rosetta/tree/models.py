# tree/models.py

from __future__ import annotations

from pydantic import BaseModel, Field


class Node(BaseModel):
    """One node of an mdast-shaped parse tree.

    Only the attributes the structuring passes read are modelled; any
    other keys a markdown parser attaches (position, data, spread, ...)
    are dropped on validation.
    """

    type: str
    value: str | None = None
    depth: int | None = Field(default=None, ge=1, le=6)
    url: str | None = None
    alt: str | None = None
    title: str | None = None
    lang: str | None = None
    ordered: bool | None = None
    children: list[Node] | None = None

    class Config:
        extra = "ignore"


Node.model_rebuild()
