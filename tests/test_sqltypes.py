from __future__ import annotations

import random

import pytest
from sqlalchemy import CHAR, Uuid, create_engine, select, text
from sqlalchemy.dialects import mssql, postgresql, sqlite
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from ulidkit.identifier import Ulid
from ulidkit.sqltypes import UlidType


class Base(DeclarativeBase):
    pass


class Event(Base):
    __tablename__ = "events"

    id: Mapped[Ulid] = mapped_column(UlidType(), primary_key=True)
    guid: Mapped[Ulid | None] = mapped_column(UlidType(storage="guid"), nullable=True)


@pytest.fixture()
def session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


def test_text_storage_round_trips_and_orders(session: Session) -> None:
    rng = random.Random(5)
    ulids = [Ulid.from_parts(rng.getrandbits(48), rng.getrandbits(80)) for _ in range(20)]
    session.add_all(Event(id=ulid) for ulid in ulids)
    session.commit()

    stored = session.scalars(select(Event.id).order_by(Event.id)).all()

    assert stored == sorted(ulids)
    assert all(isinstance(value, Ulid) for value in stored)


def test_text_column_holds_base32(session: Session) -> None:
    ulid = Ulid.parse("01ARZ3NDEKTSV4RRFFQ69G5FAV")
    session.add(Event(id=ulid))
    session.commit()

    raw = session.execute(text("SELECT id FROM events")).scalar_one()
    assert raw == "01ARZ3NDEKTSV4RRFFQ69G5FAV"


def test_guid_storage_uses_guid_text_on_sqlite(session: Session) -> None:
    ulid = Ulid.parse("01ARZ3NDEKTSV4RRFFQ69G5FAV")
    session.add(Event(id=Ulid(1), guid=ulid))
    session.commit()

    raw = session.execute(text("SELECT guid FROM events")).scalar_one()
    assert raw == str(ulid.to_guid())
    assert len(raw) == 36

    session.expire_all()
    assert session.get(Event, Ulid(1)).guid == ulid


def test_filters_accept_text_binds(session: Session) -> None:
    ulid = Ulid.parse("01ARZ3NDEKTSV4RRFFQ69G5FAV")
    session.add_all([Event(id=ulid), Event(id=Ulid(0))])
    session.commit()

    found = session.scalars(select(Event).where(Event.id == "01ARZ3NDEKTSV4RRFFQ69G5FAV")).one()
    assert found.id == ulid


def test_null_guid_round_trips(session: Session) -> None:
    session.add(Event(id=Ulid(2)))
    session.commit()
    session.expire_all()

    assert session.get(Event, Ulid(2)).guid is None


def test_rejects_unknown_storage() -> None:
    with pytest.raises(ValueError):
        UlidType(storage="binary")  # type: ignore[arg-type]


def test_guid_storage_on_native_uuid_dialects() -> None:
    ulid = Ulid.parse("01ARZ3NDEKTSV4RRFFQ69G5FAV")
    column_type = UlidType(storage="guid")

    for dialect in (postgresql.dialect(), mssql.dialect()):
        assert isinstance(column_type.load_dialect_impl(dialect), Uuid)
        bound = column_type.process_bind_param(ulid, dialect)
        assert bound == ulid.to_guid()
        assert column_type.process_result_value(bound, dialect) == ulid


def test_guid_storage_falls_back_to_char_elsewhere() -> None:
    impl = UlidType(storage="guid").load_dialect_impl(sqlite.dialect())

    assert isinstance(impl, CHAR)
    assert impl.length == 36


def test_text_storage_binds_text_on_every_dialect() -> None:
    column_type = UlidType()
    for dialect in (postgresql.dialect(), mssql.dialect(), sqlite.dialect()):
        assert column_type.load_dialect_impl(dialect).length == 26
        assert column_type.process_bind_param(Ulid(0), dialect) == "0" * 26
