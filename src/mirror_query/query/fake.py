"""In-memory QueryImage stub for tests and dry runs."""

from __future__ import annotations

from typing import NamedTuple

from mirror_query.models.response import ResponseData
from mirror_query.query.base import StatusError


class QueryCall(NamedTuple):
    """A recorded get_details invocation."""

    url: str
    token: str
    extract_digest: bool


class FakeQueryImage:
    """Answer queries from a table keyed by URL.

    Values are either a ResponseData to return or an exception to raise.
    Unknown URLs raise StatusError(404).

    Example:
        fake = FakeQueryImage({"http://reg/v2/_catalog": ResponseData(data="{}")})
        fake.get_details("http://reg/v2/_catalog", "", False)
    """

    def __init__(self, responses: dict[str, ResponseData | Exception] | None = None) -> None:
        self.responses: dict[str, ResponseData | Exception] = dict(responses or {})
        self.calls: list[QueryCall] = []

    def add(self, url: str, response: ResponseData | Exception) -> FakeQueryImage:
        self.responses[url] = response
        return self

    def get_details(self, url: str, token: str, extract_digest: bool) -> ResponseData:
        self.calls.append(QueryCall(url, token, extract_digest))
        if url not in self.responses:
            raise StatusError(404, "Not Found", url=url)

        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        if extract_digest:
            return ResponseData(data=outcome.data, link="")
        return outcome
