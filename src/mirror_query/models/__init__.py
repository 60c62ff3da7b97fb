"""Data models for mirror-query."""

from mirror_query.models.response import ResponseData

__all__ = ["ResponseData"]
