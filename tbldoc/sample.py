"""A small two-table schema used as an example and in tests."""

from __future__ import annotations

from tbldoc.cardinality import Cardinality
from tbldoc.schema import (
    Column,
    Constraint,
    Driver,
    DriverMeta,
    Index,
    Relation,
    Schema,
    Table,
    Trigger,
)

__all__ = ["new_schema"]


def new_schema() -> Schema:
    """Build schema ``testschema`` with tables ``a`` and ``b``, where ``b.b`` references ``a.a``."""
    ca = Column(name="a", type="INTEGER", comment="column a")
    cb = Column(name="b", type="INTEGER", comment="column b")

    ta = Table(
        name="a",
        comment="table a",
        columns=[ca, Column(name="a2", type="TEXT", comment="column a2")],
    )
    ta.indexes = [
        Index(
            name="PRIMARY KEY",
            definition="PRIMARY KEY(a)",
            table=ta.name,
            columns=["a"],
        )
    ]
    ta.constraints = [
        Constraint(name="PRIMARY", table=ta.name, definition="PRIMARY KEY (a)")
    ]
    ta.triggers = [
        Trigger(
            name="update_a_a2",
            definition="CREATE CONSTRAINT TRIGGER update_a_a2 AFTER INSERT OR UPDATE ON a",
        )
    ]
    tb = Table(
        name="b",
        comment="table b",
        columns=[cb, Column(name="b2", type="TEXT", comment="column b2")],
    )
    relation = Relation(
        table=tb,
        columns=[cb],
        cardinality=Cardinality.ONE_OR_MORE,
        parent_table=ta,
        parent_columns=[ca],
        parent_cardinality=Cardinality.EXACTLY_ONE,
        definition="FOREIGN KEY (b) REFERENCES a(a)",
        virtual=False,
    )
    ca.child_relations = [relation]
    cb.parent_relations = [relation]

    return Schema(
        name="testschema",
        tables=[ta, tb],
        relations=[relation],
        driver=Driver(
            name="testdriver",
            database_version="1.0.0",
            meta=DriverMeta(),
        ),
    )