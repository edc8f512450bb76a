"""Error wire model"""

import json
import logging

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError


logger = logging.getLogger(__name__)


class ErrorBody(BaseModel):
    """
    Error payload returned by a remote on a non-200 response

    The HTTP status is not part of this shape; it travels on the status line.
    """

    error_type: str = Field(default="", description="Remote error type")
    error_code: int = Field(default=0, description="Remote error code")
    error_description: str = Field(default="", description="Remote error description")

    @classmethod
    def parse_lenient(cls, raw: bytes, debug: bool = False) -> "ErrorBody":
        """
        Decode an error body without ever failing

        Invalid JSON, a non-object document or a badly typed field leaves the
        affected fields at their defaults. Dropped input is logged only when
        ``debug`` is set.
        """
        if not raw:
            return cls()

        try:
            data = json.loads(raw)
        except ValueError as e:
            if debug:
                logger.debug(f"Error body is not JSON: {e}")
            return cls()

        if not isinstance(data, dict):
            return cls()

        values = {}
        for name in cls.model_fields:
            if name not in data:
                continue
            try:
                values[name] = getattr(cls.model_validate({name: data[name]}), name)
            except PydanticValidationError:
                if debug:
                    logger.debug(f"Ignoring malformed error field {name}={data[name]!r}")
        return cls(**values)
