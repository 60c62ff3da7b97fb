"""Result model for registry queries."""

from pydantic import BaseModel, Field


class ResponseData(BaseModel):
    """Outcome of a single registry query.

    In body mode ``data`` holds the response body and ``link`` the next-page
    URL taken from the ``Link`` header. In digest mode ``data`` holds the
    ``docker-content-digest`` header value and ``link`` is always empty.
    """

    model_config = {"frozen": True}

    data: str = Field(description="Response body text or manifest digest")
    link: str = Field(default="", description="Next-page URL, empty when there is none")

    @property
    def has_next(self) -> bool:
        """Whether the response points at another page."""
        return bool(self.link)
