"""Helpers shared by the route plugins."""

from urllib.parse import quote

from fastapi import Request


def raw_request_path(request: Request, param: str = "request_path") -> str:
    """Undecoded value of the trailing ``{param:path}`` segment.

    The service percent-decodes paths itself, so routes must hand it the
    path as it came over the wire rather than Starlette's decoded form.
    Everything in front of ``param`` in the matched route, including any
    ``include_router`` prefix and the mount's ``root_path``, is removed.
    """
    raw = request.scope.get("raw_path")
    path = raw.decode("latin-1") if raw else quote(request.url.path)
    path = path.split("?", 1)[0]

    root_path: str = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        path = path[len(root_path):]

    route = request.scope.get("route")
    path_format: str = getattr(route, "path_format", "")
    marker = "{" + param + "}"
    if marker in path_format:
        prefix = path_format.split(marker, 1)[0].rstrip("/")
        if path.startswith(prefix):
            path = path[len(prefix):]

    return "/" + path.lstrip("/")
