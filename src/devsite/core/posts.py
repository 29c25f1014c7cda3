"""Storage abstraction for blog posts."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

POST_EXTENSION = ".md"

# Characters that would let a slug name a path other than <slug>.md in the posts directory.
FORBIDDEN_SLUG_CHARS = frozenset("/\\\x00")


class PostsDirectoryError(OSError):
    """Raised when the posts directory cannot be read."""


def remove_extension(filename: str) -> str:
    """Strip the last extension from a filename.

    ``"notes.v2.md"`` becomes ``"notes.v2"``; names without an extension
    are returned unchanged.
    """
    suffix = Path(filename).suffix
    if not suffix:
        return filename
    return filename[: -len(suffix)]


def is_valid_slug(slug: str) -> bool:
    """Check that a slug is a plain filename stem."""
    if slug in ("", ".", ".."):
        return False
    return not FORBIDDEN_SLUG_CHARS.intersection(slug)


class PostStore(ABC):
    """Abstract base class for post storage."""

    @abstractmethod
    async def list_slugs(self) -> list[str]:
        """List the slugs of all posts."""
        ...

    @abstractmethod
    async def read(self, slug: str) -> str | None:
        """Get raw post text by slug. Returns None if not found."""
        ...


class FilePostStore(PostStore):
    """Posts stored as ``<slug>.md`` files in a single directory."""

    def __init__(self, base_path: Path):
        self.base_path = base_path

    def _get_path(self, slug: str) -> Path | None:
        """Get the file path for a slug, or None if the slug is unsafe."""
        if not is_valid_slug(slug):
            return None
        path = self.base_path / f"{slug}{POST_EXTENSION}"
        try:
            path.resolve().relative_to(self.base_path.resolve())
        except ValueError:
            return None
        return path

    async def list_slugs(self) -> list[str]:
        """List post slugs, sorted.

        Only slugs that ``read`` will accept are listed.

        Raises:
            PostsDirectoryError: If the directory is missing or unreadable.
        """
        try:
            entries = list(self.base_path.iterdir())
        except OSError as e:
            raise PostsDirectoryError(
                f"cannot read posts directory {self.base_path}: {e}"
            ) from e

        slugs = []
        for path in entries:
            if path.is_dir():
                continue
            if path.suffix != POST_EXTENSION:
                continue
            slug = remove_extension(path.name)
            if self._get_path(slug) is None:
                logger.warning("Skipping post file with unusable name %r", path.name)
                continue
            slugs.append(slug)
        return sorted(slugs)

    async def read(self, slug: str) -> str | None:
        """Read a post's markdown text.

        Bytes that are not valid UTF-8 are replaced rather than failing the
        request. Any file that cannot be opened counts as missing.
        """
        path = self._get_path(slug)
        if path is None:
            logger.warning("Rejected invalid post slug %r", slug)
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Cannot read post %r: %s", slug, e)
            return None
