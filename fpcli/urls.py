"""Links to notebooks in the Studio web application."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from urllib.parse import quote, urlsplit, urlunsplit

DEFAULT_BASE_URL = "https://studio.fiberplane.com/"

# Characters left as they are in a path segment and in a fragment.
_PATH_SEGMENT_SAFE = "!$&'()*+,;=:@[]^|"
_FRAGMENT_SAFE = "!#$%&'()*+,-./:;=?@[\\]^_{|}~"

_TICK = re.compile(r"'")
_NON_WORD = re.compile(r"\W")
_DASHES = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Make a URL-safe slug from a title."""
    text = _TICK.sub("", text)
    text = _NON_WORD.sub("-", text)
    return _DASHES.sub("-", text)


@dataclass(frozen=True)
class NotebookUrlBuilder:
    """Builds the URL of a notebook, optionally with a title slug and a cell link."""

    workspace_id: str
    notebook_id: str
    _base_url: str | None = None
    _title: str | None = None
    _cell_id: str | None = None

    def base_url(self, base_url: str) -> NotebookUrlBuilder:
        """Use another base URL than the default one."""
        return replace(self, _base_url=str(base_url))

    def title(self, title: str) -> NotebookUrlBuilder:
        """Include a slug of the title in the URL."""
        return replace(self, _title=str(title))

    def cell_id(self, cell_id: str) -> NotebookUrlBuilder:
        """Link to a cell of the notebook."""
        return replace(self, _cell_id=str(cell_id))

    def url(self) -> str:
        """Build the URL to the notebook."""
        parts = urlsplit(self._base_url or DEFAULT_BASE_URL)
        notebook_id = str(self.notebook_id)
        if self._title is not None:
            notebook_slug = f"{slugify(self._title)}-{notebook_id}"
        else:
            notebook_slug = notebook_id

        segments = ("workspaces", str(self.workspace_id), "notebooks", notebook_slug)
        encoded = "/".join(quote(segment, safe=_PATH_SEGMENT_SAFE) for segment in segments)
        path = parts.path or "/"
        if len(path) > 1:
            path += "/"
        path += encoded

        fragment = parts.fragment
        if self._cell_id is not None:
            fragment = quote(self._cell_id, safe=_FRAGMENT_SAFE)
        return urlunsplit((parts.scheme, parts.netloc, path, parts.query, fragment))