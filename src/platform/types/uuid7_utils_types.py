"""
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__

UUID7 Pydantic Type Integration

Trip and reservation ids are uuid_utils UUID7 values. uuid_utils.UUID does not
plug into Pydantic validation or OpenAPI schema generation on its own, so
UtilsUUID7 adds both.

```python
class ReservationResponse(BaseModel):
    id: UtilsUUID7  # "019a3fa5-..." in JSON, uuid_utils.UUID in Python
```
"""

from typing import Any
import uuid

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


class UtilsUUID7(UUID):
    """Pydantic-compatible uuid_utils UUID"""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        JSON mode only accepts strings (JSON has no UUID type). Python mode also
        accepts uuid_utils.UUID and stdlib uuid.UUID objects, which is what the
        repositories hand back. Serialization is always a string.

        with_info_plain_validator_function is avoided because its schema cannot
        be rendered into OpenAPI.
        """

        def _to_uuid(value: Any) -> UUID:
            try:
                return UUID(str(value))
            except Exception as e:
                raise ValueError(f'Invalid UUID: {value}') from e

        def validate_uuid_python(value: Any) -> UUID:
            if isinstance(value, UUID):
                return value
            return _to_uuid(value)

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(_to_uuid),
                ]
            ),
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    core_schema.chain_schema(
                        [
                            core_schema.union_schema(
                                [
                                    core_schema.str_schema(),
                                    core_schema.is_instance_schema(uuid.UUID),
                                ]
                            ),
                            core_schema.no_info_plain_validator_function(validate_uuid_python),
                        ]
                    ),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # handler(schema) would expand the validator chain into the OpenAPI document
        return {'type': 'string', 'format': 'uuid'}


def to_std_uuid(value: Any) -> uuid.UUID:
    """uuid_utils.UUID -> stdlib uuid.UUID, the type SQLAlchemy's Uuid column binds"""
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def to_utils_uuid(value: Any) -> UUID:
    """stdlib uuid.UUID (as loaded from the database) -> uuid_utils.UUID"""
    return value if isinstance(value, UUID) else UUID(str(value))
