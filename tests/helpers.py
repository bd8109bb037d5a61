"""Test doubles shared across test modules.

`FakeGitHubApi` records every `(method, path, body)` it receives so tests can
assert on call counts and ordering, and answers from a small routing table of
canned responses or `ApiError`s.
"""

from __future__ import annotations

from typing import Any

from core.errors import ApiError


class FakeGitHubApi:
    """Satisfies `core.interfaces.api.GitHubApi` without any network."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.routes: dict[tuple[str, str], Any] = {}
        self._issue_number = 0
        self.closed = False

    def on(self, method: str, path: str, response: Any) -> None:
        """Register a response (value, exception, or callable(method, path, body))."""

        self.routes[(method, path)] = response

    def count(self, method: str, path: str | None = None) -> int:
        return sum(1 for m, p, _ in self.calls if m == method and (path is None or p == path))

    async def request(self, path: str, method: str = "GET", body: Any | None = None) -> Any:
        self.calls.append((method, path, body))
        response = self.routes.get((method, path))
        if response is None:
            return self._default(method, path, body)
        if callable(response) and not isinstance(response, BaseException):
            response = response(method, path, body)
        if isinstance(response, BaseException):
            raise response
        return response

    async def aclose(self) -> None:
        self.closed = True

    def _default(self, method: str, path: str, body: Any) -> Any:
        if method == "GET" and path.endswith("/labels"):
            return []
        if method == "POST" and path.endswith("/labels"):
            return dict(body)
        if method == "POST" and path.endswith("/issues"):
            self._issue_number += 1
            return {
                "number": self._issue_number,
                "html_url": f"https://github.com/octo/demo/issues/{self._issue_number}",
                "title": body["title"],
            }
        if method == "GET" and path.startswith("/repos/"):
            return {"full_name": path.removeprefix("/repos/")}
        raise ApiError("Not Found", status_code=404)


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
