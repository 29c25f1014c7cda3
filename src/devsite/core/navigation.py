"""Navigation bar construction."""

import itertools
from collections.abc import Iterable, Iterator

from devsite.core.models import Header, HeaderData


def make_headers(entries: Iterable[tuple[str, str]], start: int = 1) -> list[Header]:
    """Build headers from (name, path) pairs with sequential ids."""
    ids: Iterator[int] = itertools.count(start)
    return [Header(id=next(ids), name=name, path=path) for name, path in entries]


def build_header_data(chess_enabled: bool = True) -> HeaderData:
    """Return the site navigation.

    The chess entry is only listed when the chess route is registered.
    """
    entries = [("Projects", "/blog")]
    if chess_enabled:
        entries.append(("Chess", "/chess"))
    entries.append(("Contact", "/contact"))
    return HeaderData(headers=make_headers(entries))
