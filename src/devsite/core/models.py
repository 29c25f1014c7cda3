"""Data models for devsite."""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Header(BaseModel):
    """A navigation entry."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    path: str


class HeaderData(BaseModel):
    """The navigation bar shown on every full page."""

    model_config = ConfigDict(frozen=True)

    headers: list[Header] = Field(default_factory=list)


class BlogData(BaseModel):
    """Slugs of the posts currently on disk."""

    slugs: list[str] = Field(default_factory=list)


class PostMetadata(BaseModel):
    """Metadata extracted from post front matter."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    date: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "date", "description", mode="before")
    @classmethod
    def scalar_to_str(cls, v: Any) -> Any:
        """YAML loads bare dates and numbers as non-strings; keep them as text."""
        if isinstance(v, (datetime.date, datetime.datetime)):
            return v.isoformat()
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        """Accept ``tags: a, b`` as well as a YAML list of scalars."""
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        if isinstance(v, list):
            return [str(t) for t in v if t is not None]
        return v


class BlogPostData(BaseModel):
    """A single rendered post."""

    slug: str = ""
    html: str = ""
    metadata: PostMetadata = Field(default_factory=PostMetadata)

    @property
    def title(self) -> str:
        """Return title from front matter or derive it from the slug."""
        if self.metadata.title:
            return self.metadata.title
        return self.slug.replace("-", " ").replace("_", " ").strip().capitalize()


class ChessData(BaseModel):
    """Chess ratings shown by the chess widget."""

    rapid: int = 0
    games: int = 0
    username: str | None = None


class LichessPerf(BaseModel):
    """Rating summary for one Lichess time control."""

    games: int = 0
    rating: int = 0


class LichessProfile(BaseModel):
    """Subset of the Lichess ``/api/account`` response."""

    id: str = ""
    username: str = ""
    perfs: dict[str, LichessPerf] = Field(default_factory=dict)


class Page(BaseModel):
    """View model handed to the full-page templates.

    Built fresh for each request; only ``header_data`` is shared.
    """

    header_data: HeaderData
    blog_data: BlogData = Field(default_factory=BlogData)
    blog_post_data: BlogPostData = Field(default_factory=BlogPostData)
    chess_data: ChessData = Field(default_factory=ChessData)
