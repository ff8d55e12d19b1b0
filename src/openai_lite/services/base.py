"""
Shared plumbing for endpoint services.
"""

from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core import LoggerMixin, ResponseDecodeError, log_error
from ..utils.http_client import HTTPClient


ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseService(LoggerMixin):
    """Base class for services bound to one HTTP client."""

    def __init__(self, http_client: HTTPClient):
        self.http = http_client

    def parse(self, model: Type[ModelT], body: Any) -> ModelT:
        """
        Validate a decoded response body into ``model``.

        Raises:
            ResponseDecodeError: If the body does not match the schema
        """
        try:
            return model.model_validate(body)
        except ValidationError as e:
            error = ResponseDecodeError(
                f"Unexpected {model.__name__} response: {e.error_count()} validation error(s)",
                details={"errors": e.errors(include_url=False, include_input=False)},
            )
            log_error(self.logger, error, context={"model": model.__name__})
            raise error from e
