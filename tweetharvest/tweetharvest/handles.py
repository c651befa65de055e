"""Turn account references into canonical handles."""

from __future__ import annotations

import re
from urllib.parse import urlparse

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def resolve_handle(ref: int | str) -> str:
    """Return the handle named by *ref*.

    Accepts a numeric account id, a profile URL, or a handle with an
    optional leading ``@``.
    """
    if isinstance(ref, int) and not isinstance(ref, bool):
        return str(ref)
    ref = str(ref)
    if _SCHEME_RE.match(ref):
        path = urlparse(ref).path.removeprefix("/").removesuffix("/")
        return path.split("/")[0]
    return ref.removeprefix("@")
