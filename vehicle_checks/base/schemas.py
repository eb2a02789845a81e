from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Dialect
from sqlalchemy.sql.type_api import TypeEngine
from sqlalchemy.types import TypeDecorator

T = TypeVar("T")


class PydanticJSONB(TypeDecorator, Generic[T]):
    """
    SQLAlchemy type that stores Pydantic v2-validated data in JSON/JSONB.

    - Uses JSONB on PostgreSQL, JSON elsewhere (the in-memory SQLite default).
    - `T` can be a BaseModel subclass or a typing construct such as
      `list[CheckItem]`.
    """

    impl = sa.JSON
    cache_ok: bool = True

    pydantic_type: Any
    _adapter: TypeAdapter[T]

    def __init__(self, pydantic_type: Any) -> None:
        super().__init__()
        self.pydantic_type = pydantic_type
        self._adapter = TypeAdapter(pydantic_type)

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(sa.JSON())

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any | None:
        if value is None:
            return None
        model_value: T = self._adapter.validate_python(value)
        return self._adapter.dump_python(model_value, mode="json")

    def process_result_value(self, value: Any, dialect: Dialect) -> T | None:
        if value is None:
            return None
        return self._adapter.validate_python(value)


class CamelModel(BaseModel):
    """Wire models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


class BaseDTO(CamelModel):
    id: UUID
    created_at: datetime
