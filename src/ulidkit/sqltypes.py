"""SQLAlchemy column type for :class:`~ulidkit.identifier.Ulid` values."""

from __future__ import annotations

import uuid
from typing import Any, Literal

from sqlalchemy.types import CHAR, TypeDecorator

from .codec import ENCODED_LENGTH
from .identifier import Ulid

__all__ = ["UlidType"]


class UlidType(TypeDecorator):
    """Store ULIDs as sortable text or in GUID layout.

    ``storage="text"`` (default) keeps the 26-character Base32 form in a
    ``CHAR(26)`` column, so ``ORDER BY`` matches ULID order.

    ``storage="guid"`` stores the GUID reinterpretation of the native bytes:
    native UUID columns on PostgreSQL and SQL Server, a 36-character string
    elsewhere. Database ordering of that column does not follow ULID order.

    Values are always returned to Python as :class:`Ulid` objects; bind
    parameters may be ``Ulid``, text, or ``uuid.UUID``.
    """

    impl = CHAR
    cache_ok = True

    def __init__(self, storage: Literal["text", "guid"] = "text", **kwargs: Any) -> None:
        if storage not in {"text", "guid"}:
            raise ValueError("storage must be 'text' or 'guid'")
        self.storage = storage
        super().__init__(**kwargs)

    def load_dialect_impl(self, dialect: Any):
        if self.storage == "text":
            return dialect.type_descriptor(CHAR(ENCODED_LENGTH))
        name = dialect.name
        if name in {"postgresql", "postgres"}:
            from sqlalchemy.dialects.postgresql import UUID

            return dialect.type_descriptor(UUID(as_uuid=True))
        if name == "mssql":
            from sqlalchemy.dialects.mssql import UNIQUEIDENTIFIER

            return dialect.type_descriptor(UNIQUEIDENTIFIER())
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value: Any, dialect: Any):
        if value is None:
            return None
        ulid = _coerce(value)
        if self.storage == "text":
            return str(ulid)
        guid = ulid.to_guid()
        if dialect.name in {"postgresql", "postgres", "mssql"}:
            return guid
        return str(guid)

    def process_result_value(self, value: Any, dialect: Any):
        if value is None:
            return None
        if self.storage == "text":
            return Ulid.parse(str(value).strip())
        if isinstance(value, uuid.UUID):
            return Ulid.from_guid(value)
        return Ulid.from_guid(uuid.UUID(str(value)))

    @property
    def python_type(self) -> type[Ulid]:
        return Ulid


def _coerce(value: Any) -> Ulid:
    if isinstance(value, Ulid):
        return value
    if isinstance(value, uuid.UUID):
        return Ulid.from_guid(value)
    return Ulid.parse(str(value))
