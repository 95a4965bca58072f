"""Declarative route registry and generic REST dispatch.

Resource modules describe their endpoints as a mapping of path template to
``{HTTP method: operation name}`` and hand it to :meth:`Internal.define`,
which installs one async method per operation name::

    Internal.define({
        "/webhooks/{webhook.id}": {"GET": "get_webhook"},
    })

    webhook = await internal.get_webhook("1234")

Positional arguments fill the ``{...}`` placeholders left to right. One
extra argument becomes query params for GET/DELETE and the JSON body
otherwise; a second extra argument (non-GET/DELETE only) is the query.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping
from urllib.parse import quote

from discord_adapter.core.http import HTTPClient
from discord_adapter.utils.logging import get_logger

log = get_logger(__name__)

METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
_BODYLESS = frozenset({"GET", "DELETE"})
_PLACEHOLDER = re.compile(r"\{([^}]+)\}")

Decoder = Callable[[Any], Any]
RouteMap = Mapping[str, Mapping[str, "str | list[str]"]]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    name: str

    @property
    def placeholders(self) -> list[str]:
        return _PLACEHOLDER.findall(self.path)


class Internal:
    """Collection of raw API operations, bound to one :class:`HTTPClient`."""

    _routes: dict[str, Route] = {}
    _decoders: dict[str, Decoder] = {}

    def __init__(self, http: HTTPClient) -> None:
        self.http = http

    @classmethod
    def define(cls, routes: RouteMap, results: Mapping[str, Decoder] | None = None) -> None:
        """Install an async method on ``Internal`` for every route entry.

        ``results`` maps operation names to decoders applied to non-empty
        responses. Re-defining an identical route is a no-op; binding an
        existing name to a different route raises ``ValueError``. The whole
        map is checked before anything is installed.
        """
        results = results or {}
        pending: dict[str, Route] = {}
        for path, methods in routes.items():
            for method, names in methods.items():
                method = method.upper()
                if method not in METHODS:
                    raise ValueError(f"unsupported HTTP method {method!r} for {path}")
                for name in [names] if isinstance(names, str) else names:
                    route = Route(method, path, name)
                    existing = pending.get(name) or cls._routes.get(name)
                    if existing is None and hasattr(cls, name):
                        raise ValueError(f"operation name {name!r} shadows an Internal attribute")
                    if existing is not None and existing != route:
                        raise ValueError(
                            f"operation {name!r} already bound to {existing.method} {existing.path}"
                        )
                    pending[name] = route

        for name, route in pending.items():
            cls._routes[name] = route
            if name in results:
                cls._decoders[name] = results[name]
            setattr(cls, name, _make_operation(route))

    @classmethod
    def routes(cls) -> list[Route]:
        return list(cls._routes.values())

    @classmethod
    def get_route(cls, name: str) -> Route:
        try:
            return cls._routes[name]
        except KeyError:
            raise AttributeError(f"no operation named {name!r}") from None

    async def _dispatch(self, route: Route, args: tuple[Any, ...]) -> Any:
        remaining = list(args)

        def fill(match: re.Match[str]) -> str:
            if not remaining:
                raise TypeError(
                    f"too few arguments for {route.path}, received {len(args)}"
                )
            return quote(str(remaining.pop(0)), safe="")

        url = _PLACEHOLDER.sub(fill, route.path)

        body: Any = None
        params: dict[str, Any] | None = None
        if len(remaining) == 1:
            if route.method in _BODYLESS:
                params = _to_query(remaining[0])
            else:
                body = _to_body(remaining[0])
        elif len(remaining) == 2 and route.method not in _BODYLESS:
            body = _to_body(remaining[0])
            params = _to_query(remaining[1])
        elif len(remaining) > 1:
            raise TypeError(
                f"too many arguments for {route.path}, received {len(args)}"
            )

        decoder = self._decoders.get(route.name)
        result = await self.http.request(
            route.method,
            url,
            json=body,
            params=params,
            route=route.path,
            expect_json=decoder is not None,
        )
        if decoder is None or result is None:
            return result
        return decoder(result)


def _make_operation(route: Route) -> Callable[..., Any]:
    async def operation(self: Internal, *args: Any) -> Any:
        return await self._dispatch(route, args)

    operation.__name__ = route.name
    operation.__qualname__ = f"Internal.{route.name}"
    operation.__doc__ = f"{route.method} {route.path}"
    return operation


def _to_body(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _to_query(value: Any) -> dict[str, Any] | None:
    data = _to_body(value)
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise TypeError(f"query parameters must be a mapping, got {type(data).__name__}")
    query: dict[str, Any] = {}
    for key, item in data.items():
        if item is None:
            continue
        # httpx would send True as "True"
        query[key] = ("true" if item else "false") if isinstance(item, bool) else item
    return query
