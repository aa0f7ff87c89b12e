"""Virtual path resolution and origin checks.

``~/`` prefixes are application-root-relative. Bare service names (no scheme,
no leading ``/`` or ``~``) resolve under ``~/Services/``.
"""

from __future__ import annotations

import httpx

VIRTUAL_ROOT = "~/"
SERVICES_ROOT = "~/Services/"

_DEV_HOSTNAMES = frozenset({"localhost", "127.0.0.1", "::1", "[::1]"})
_DEV_SUFFIXES = (".local", ".localhost")


def resolve_url(path: str | None, application_path: str = "/") -> str | None:
    """Expand a ``~/`` prefix into *application_path*; anything else passes through."""
    if path is not None and path.startswith(VIRTUAL_ROOT):
        return application_path + path[2:]
    return path


def resolve_service_url(name: str | None, application_path: str = "/") -> str | None:
    """Resolve a bare service name under ``~/Services/``, else defer to :func:`resolve_url`."""
    if name and not name.startswith(("~", "/")) and "://" not in name:
        return resolve_url(SERVICES_ROOT + name, application_path)
    return resolve_url(name, application_path)


def absolute_url(url: str, base: str) -> str:
    """Join a possibly relative *url* onto *base* (the current page)."""
    return str(httpx.URL(base).join(url))


def is_same_origin(url_a: str, url_b: str) -> bool:
    """True iff scheme, host and port match.

    *url_a* may be relative; it is joined onto *url_b* first. Default ports
    are normalized, so ``http://a/`` and ``http://a:80/`` share an origin.
    """
    first = httpx.URL(url_b).join(url_a)
    second = httpx.URL(url_b)
    return (
        first.scheme == second.scheme
        and first.host == second.host
        and first.port == second.port
    )


def is_development_mode(hostname: str | None) -> bool:
    """Loopback hosts and ``.local``/``.localhost`` domains count as development."""
    host = (hostname or "").lower()
    return host in _DEV_HOSTNAMES or host.endswith(_DEV_SUFFIXES)
