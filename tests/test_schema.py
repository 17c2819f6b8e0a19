import pytest

from tbldoc.cardinality import Cardinality
from tbldoc.schema import (
    COLUMN_CHILDREN,
    COLUMN_COMMENT,
    COLUMN_EXTRA_DEF,
    COLUMN_LABELS,
    COLUMN_OCCURRENCES,
    COLUMN_PARENTS,
    COLUMN_PERCENTS,
    Column,
    Constraint,
    Driver,
    DriverMeta,
    Index,
    Label,
    Relation,
    Schema,
    SchemaError,
    Table,
    Trigger,
    merge_label,
)


def _linked_schema():
    ca = Column(name="a", type="INTEGER", comment="column a")
    cb = Column(name="b", type="INTEGER", comment="column b")
    ta = Table(name="a", comment="table a", columns=[ca, Column(name="a2", type="TEXT")])
    tb = Table(name="b", comment="table b", columns=[cb, Column(name="b2", type="TEXT")])
    rel = Relation(
        table=tb,
        columns=[cb],
        parent_table=ta,
        parent_columns=[ca],
        cardinality=Cardinality.ONE_OR_MORE,
        parent_cardinality=Cardinality.EXACTLY_ONE,
    )
    ca.child_relations = [rel]
    cb.parent_relations = [rel]
    return Schema(name="s", tables=[ta, tb], relations=[rel]), ta, tb, ca, cb, rel


def test_find_table_by_name():
    schema = Schema(
        name="testschema",
        tables=[Table(name="a", comment="table a"), Table(name="b", comment="table b")],
    )
    assert schema.find_table_by_name("b").comment == "table b"


def test_find_table_by_name_missing():
    with pytest.raises(SchemaError, match="not found table 'x'"):
        Schema(tables=[Table(name="a")]).find_table_by_name("x")


def test_find_table_normalizes_postgres_names():
    schema = Schema(
        tables=[Table(name="public.users")],
        driver=Driver(name="postgres", meta=DriverMeta(current_schema="public")),
    )
    assert schema.find_table_by_name("users").name == "public.users"
    assert schema.normalize_table_name("other.t") == "other.t"
    assert schema.normalize_table_names(["x", "y.z"]) == ["public.x", "y.z"]


def test_normalize_other_driver_unchanged():
    schema = Schema(driver=Driver(name="mysql", meta=DriverMeta(current_schema="db")))
    assert schema.normalize_table_name("users") == "users"


def test_find_column_by_name():
    table = Table(
        name="testtable",
        columns=[Column(name="a", comment="column a"), Column(name="b", comment="column b")],
    )
    assert table.find_column_by_name("b").comment == "column b"
    with pytest.raises(SchemaError, match="not found column 'c' on table 'testtable'"):
        table.find_column_by_name("c")


def test_find_index_constraint_trigger():
    table = Table(
        name="t",
        indexes=[Index(name="idx", definition="INDEX idx")],
        constraints=[Constraint(name="pk", type="PRIMARY KEY")],
        triggers=[Trigger(name="trg", definition="CREATE TRIGGER trg")],
    )
    assert table.find_index_by_name("idx").definition == "INDEX idx"
    assert table.find_constraint_by_name("pk").type == "PRIMARY KEY"
    assert table.find_trigger_by_name("trg").definition == "CREATE TRIGGER trg"
    with pytest.raises(SchemaError, match="not found index"):
        table.find_index_by_name("nope")
    with pytest.raises(SchemaError, match="not found constraint"):
        table.find_constraint_by_name("nope")
    with pytest.raises(SchemaError, match="not found trigger"):
        table.find_trigger_by_name("nope")


def test_find_constraints_by_column_name():
    table = Table(
        name="testtable",
        columns=[Column(name="a", comment="column a"), Column(name="b", comment="column b")],
    )
    table.constraints = [
        Constraint(name="PRIMARY", type="PRIMARY KEY", definition="PRIMARY KEY(a)",
                   table=table.name, columns=["a"]),
        Constraint(name="UNIQUE", type="UNIQUE", definition="UNIQUE KEY a (b)",
                   table=table.name, columns=["b"]),
    ]
    got = table.find_constraints_by_column_name("a")
    assert len(got) == 1
    assert got[0].name == "PRIMARY"


@pytest.mark.parametrize(
    "name, added, expected",
    [
        (COLUMN_EXTRA_DEF, Column(name="b"), False),
        (COLUMN_EXTRA_DEF, Column(name="b", extra_def="ExtraDef"), True),
        (COLUMN_OCCURRENCES, Column(name="b"), False),
        (COLUMN_OCCURRENCES, Column(name="b", occurrences=0), True),
        (COLUMN_PERCENTS, Column(name="b"), False),
        (COLUMN_PERCENTS, Column(name="b", percents=0.0), True),
        (COLUMN_CHILDREN, Column(name="b"), False),
        (COLUMN_CHILDREN, Column(name="b", child_relations=[Relation(table=Table(name="x"))]), True),
        (COLUMN_PARENTS, Column(name="b"), False),
        (COLUMN_PARENTS, Column(name="b", parent_relations=[Relation(table=Table(name="x"))]), True),
        (COLUMN_COMMENT, Column(name="b"), False),
        (COLUMN_COMMENT, Column(name="b", comment="comment"), True),
        (COLUMN_LABELS, Column(name="b"), False),
        (COLUMN_LABELS, Column(name="b", labels=[Label(name="TestLabel")]), True),
    ],
)
def test_has_column_with_values(name, added, expected):
    table = Table(name="testTable", columns=[Column(name="a"), added])
    assert table.has_column_with_values(name) is expected


@pytest.mark.parametrize(
    "table, name, hide, expected",
    [
        (Table(name="testTable"), COLUMN_COMMENT, [], True),
        (Table(name="testTable"), COLUMN_COMMENT, [COLUMN_COMMENT], False),
        (Table(name="testTable", columns=[Column(name="testColumn", comment="comment")]),
         COLUMN_COMMENT, [COLUMN_COMMENT], True),
        (Table(name="testTable"), COLUMN_EXTRA_DEF, [], False),
    ],
)
def test_show_column(table, name, hide, expected):
    assert table.show_column(name, hide) is expected


def test_sort():
    schema = Schema(
        name="testschema",
        tables=[
            Table(name="b", comment="table b"),
            Table(name="a", comment="table a", columns=[
                Column(name="b", comment="column b"),
                Column(name="a", comment="column a"),
            ]),
        ],
    )
    schema.sort()
    assert schema.tables[0].name == "a"
    assert schema.tables[0].columns[0].name == "a"


def test_repair_links_relations():
    ta = Table(name="a", type="BASE TABLE", columns=[Column(name="a"), Column(name="a2")])
    tb = Table(name="b", type="BASE TABLE", columns=[Column(name="b"), Column(name="b2")],
               referenced_tables=[Table(name="a"), Table(name="elsewhere")])
    rel = Relation(
        table=Table(name="a"),
        columns=[Column(name="a")],
        parent_table=Table(name="b"),
        parent_columns=[Column(name="b")],
    )
    schema = Schema(name="testschema", tables=[ta, tb], relations=[rel])
    schema.repair()

    assert rel.table is ta
    assert rel.parent_table is tb
    assert rel.columns[0] is ta.columns[0]
    assert rel.parent_columns[0] is tb.columns[0]
    assert ta.columns[0].parent_relations == [rel]
    assert tb.columns[0].child_relations == [rel]
    assert ta.columns[0].parent_relations[0].parent_table.name == "b"
    assert tb.columns[0].child_relations[0].table.name == "a"
    assert tb.referenced_tables[0] is ta
    assert tb.referenced_tables[1].external is True
    assert len(schema.relations) == 1


def test_repair_missing_column():
    schema = Schema(
        tables=[Table(name="a", columns=[Column(name="a")]), Table(name="b")],
        relations=[Relation(table=Table(name="a"), columns=[Column(name="zz")],
                            parent_table=Table(name="b"))],
    )
    with pytest.raises(SchemaError, match="failed to repair relation"):
        schema.repair()


def test_find_relation_by_identity():
    schema, ta, tb, ca, cb, rel = _linked_schema()
    assert schema.find_relation([cb], [ca]) is rel
    with pytest.raises(SchemaError):
        schema.find_relation([Column(name="b")], [ca])


def test_has_table_with_labels():
    schema = Schema(tables=[Table(name="a")])
    assert schema.has_table_with_labels() is False
    schema.tables.append(Table(name="b", labels=[Label(name="x")]))
    assert schema.has_table_with_labels() is True


def test_merge_label():
    labels = [Label(name="a")]
    assert merge_label(labels, "a") == [Label(name="a")]
    assert merge_label(labels, "b") == [Label(name="a"), Label(name="b", virtual=True)]


def test_collect_tables_and_relations():
    schema, ta, tb, ca, cb, rel = _linked_schema()
    tables, relations = ta.collect_tables_and_relations(0, True)
    assert [t.name for t in tables] == ["a"]
    assert relations == []

    tables, relations = ta.collect_tables_and_relations(1, True)
    assert [t.name for t in tables] == ["a", "b"]
    assert len(relations) == 1 and relations[0] is rel

    tables, relations = ta.collect_tables_and_relations(3, True)
    assert [t.name for t in tables] == ["a", "b"]
    assert len(relations) == 1


def test_contains():
    ta = Table(name="a")
    assert ta.contains([Table(name="b"), Table(name="a")]) is True
    assert ta.contains([Table(name="b")]) is False