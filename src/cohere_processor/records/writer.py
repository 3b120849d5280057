"""
Response-field writer: stores a vendor response into the configured record field.
"""

from typing import Any, Optional

import structlog

from cohere_processor.records.exceptions import FieldResolutionError
from cohere_processor.records.models import Record
from cohere_processor.records.reference import ReferenceResolver

logger = structlog.get_logger(__name__)


class ResponseWriter:
    """
    Writes values through a ReferenceResolver.

    A writer without a resolver is a no-op (nothing is written, no error).
    """

    def __init__(self, resolver: Optional[ReferenceResolver]):
        self.resolver = resolver

    def write(self, record: Record, value: Any) -> None:
        """
        Write value into the resolved field of record.

        Raises:
            FieldResolutionError: "failed setting response body: ..." when the
                field cannot hold the value
        """
        if self.resolver is None:
            return

        try:
            self.resolver.resolve(record).set(value)
        except FieldResolutionError as e:
            logger.debug("Failed setting response body", path=self.resolver.path, error=e.message)
            raise FieldResolutionError(
                f"failed setting response body: {e.message}",
                details={"path": self.resolver.path, **e.details},
            ) from e
