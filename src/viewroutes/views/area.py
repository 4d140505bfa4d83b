"""HTTP status area: lets a view answer with a status other than 200.

The area only records the status on the request (``_http_statuscode``); the
route subscriber's page listener copies it onto the page result later.
"""

from __future__ import annotations

from http import HTTPStatus

from pydantic import validate_call

from viewroutes.http import Request

__all__ = ["HttpStatusArea"]


class HttpStatusArea:
    __slots__ = ("status_code", "empty")

    @validate_call
    def __init__(self, status_code: int = 200, empty: bool = False) -> None:
        HTTPStatus(status_code)
        self.status_code = status_code
        self.empty = empty

    def render(self, request: Request, empty: bool = False) -> str:
        """Record the status on ``request``.

        With an empty result the status is recorded only when the area is
        configured to show for empty results (``empty=True``).
        """
        if not empty or self.empty:
            request.attributes.set("_http_statuscode", self.status_code)
        return ""
