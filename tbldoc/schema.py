"""Model of a database schema: tables, columns, relations and friends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from tbldoc.cardinality import Cardinality

__all__ = [
    "TYPE_FK",
    "COLUMN_EXTRA_DEF",
    "COLUMN_OCCURRENCES",
    "COLUMN_PERCENTS",
    "COLUMN_CHILDREN",
    "COLUMN_PARENTS",
    "COLUMN_COMMENT",
    "COLUMN_LABELS",
    "DEFAULT_HIDE_COLUMNS",
    "HIDEABLE_COLUMNS",
    "SchemaError",
    "Label",
    "merge_label",
    "Index",
    "Constraint",
    "Trigger",
    "Column",
    "Table",
    "Relation",
    "DriverMeta",
    "Function",
    "Driver",
    "Schema",
]

TYPE_FK = "FOREIGN KEY"

COLUMN_EXTRA_DEF = "ExtraDef"
COLUMN_OCCURRENCES = "Occurrences"
COLUMN_PERCENTS = "Percents"
COLUMN_CHILDREN = "Children"
COLUMN_PARENTS = "Parents"
COLUMN_COMMENT = "Comment"
COLUMN_LABELS = "Labels"

DEFAULT_HIDE_COLUMNS = (COLUMN_EXTRA_DEF, COLUMN_OCCURRENCES, COLUMN_PERCENTS, COLUMN_LABELS)
HIDEABLE_COLUMNS = (
    COLUMN_EXTRA_DEF,
    COLUMN_OCCURRENCES,
    COLUMN_PERCENTS,
    COLUMN_CHILDREN,
    COLUMN_PARENTS,
    COLUMN_COMMENT,
    COLUMN_LABELS,
)

_SCHEMA_QUALIFIED_DRIVERS = ("postgres", "redshift")


class SchemaError(LookupError):
    """Raised when a schema element cannot be found or linked."""


@dataclass
class Label:
    name: str
    virtual: bool = False


def merge_label(labels: list[Label], name: str) -> list[Label]:
    """Return the labels with a virtual label ``name`` added if missing."""
    if any(label.name == name for label in labels):
        return labels
    return [*labels, Label(name=name, virtual=True)]


@dataclass
class Index:
    name: str
    definition: str = ""
    table: Optional[str] = None
    columns: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class Constraint:
    name: str
    type: str = ""
    definition: str = ""
    table: Optional[str] = None
    referenced_table: Optional[str] = None
    columns: list[str] = field(default_factory=list)
    referenced_columns: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class Trigger:
    name: str
    definition: str = ""
    comment: str = ""


@dataclass
class Column:
    name: str
    type: str = ""
    nullable: bool = False
    default: Optional[str] = None
    comment: str = ""
    extra_def: str = ""
    occurrences: Optional[int] = None
    percents: Optional[float] = None
    labels: list[Label] = field(default_factory=list)
    parent_relations: list[Relation] = field(default_factory=list, repr=False, compare=False)
    child_relations: list[Relation] = field(default_factory=list, repr=False, compare=False)
    pk: bool = field(default=False, compare=False)
    fk: bool = field(default=False, compare=False)
    hide_for_er: bool = field(default=False, compare=False)


@dataclass
class Table:
    name: str
    type: str = ""
    comment: str = ""
    columns: list[Column] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)
    triggers: list[Trigger] = field(default_factory=list)
    definition: str = ""
    labels: list[Label] = field(default_factory=list)
    referenced_tables: list[Table] = field(default_factory=list, repr=False)
    external: bool = field(default=False, compare=False)

    def _find(self, items, name: str, kind: str):
        for item in items:
            if item.name == name:
                return item
        raise SchemaError(f"not found {kind} '{name}' on table '{self.name}'")

    def find_column_by_name(self, name: str) -> Column:
        return self._find(self.columns, name, "column")

    def find_index_by_name(self, name: str) -> Index:
        return self._find(self.indexes, name, "index")

    def find_constraint_by_name(self, name: str) -> Constraint:
        return self._find(self.constraints, name, "constraint")

    def find_trigger_by_name(self, name: str) -> Trigger:
        return self._find(self.triggers, name, "trigger")

    def find_constraints_by_column_name(self, name: str) -> list[Constraint]:
        """Constraints covering the column, once per occurrence of it."""
        return [ct for ct in self.constraints for col in ct.columns if col == name]

    def has_column_with_values(self, name: str) -> bool:
        """Whether any column carries a value for the given attribute."""
        checks = {
            COLUMN_EXTRA_DEF: lambda c: c.extra_def != "",
            COLUMN_OCCURRENCES: lambda c: c.occurrences is not None,
            COLUMN_PERCENTS: lambda c: c.percents is not None,
            COLUMN_CHILDREN: lambda c: bool(c.child_relations),
            COLUMN_PARENTS: lambda c: bool(c.parent_relations),
            COLUMN_COMMENT: lambda c: c.comment != "",
            COLUMN_LABELS: lambda c: bool(c.labels),
        }
        check = checks.get(name)
        if check is None:
            return False
        return any(check(c) for c in self.columns)

    def show_column(self, name: str, hide_columns) -> bool:
        """Whether a column attribute should be shown in documentation."""
        hidden = dict.fromkeys([*DEFAULT_HIDE_COLUMNS, *(hide_columns or ())])
        if name in hidden:
            return self.has_column_with_values(name)
        return True

    def collect_tables_and_relations(
        self, distance: int, root: bool = True
    ) -> tuple[list[Table], list[Relation]]:
        """Gather tables and relations reachable within ``distance`` hops."""
        tables: list[Table] = [self]
        relations: list[Relation] = []
        if distance == 0:
            return tables, relations
        distance -= 1
        for column in self.columns:
            for relation in column.parent_relations:
                relations.append(relation)
                ts, rs = relation.parent_table.collect_tables_and_relations(distance, False)
                tables.extend(ts)
                relations.extend(rs)
            for relation in column.child_relations:
                relations.append(relation)
                ts, rs = relation.table.collect_tables_and_relations(distance, False)
                tables.extend(ts)
                relations.extend(rs)

        if not root:
            return tables, relations

        unique_tables: dict[str, Table] = {}
        for table in tables:
            unique_tables.setdefault(table.name, table)

        seen: set[int] = set()
        unique_relations: list[Relation] = []
        for relation in relations:
            if id(relation) in seen:
                continue
            seen.add(id(relation))
            if relation.parent_table.name in unique_tables and relation.table.name in unique_tables:
                unique_relations.append(relation)

        return list(unique_tables.values()), unique_relations

    def contains(self, tables) -> bool:
        """Whether a table of the same name is among ``tables``."""
        return any(t.name == self.name for t in tables)


@dataclass
class Relation:
    table: Table
    columns: list[Column] = field(default_factory=list)
    parent_table: Optional[Table] = None
    parent_columns: list[Column] = field(default_factory=list)
    cardinality: Cardinality = Cardinality.UNKNOWN
    parent_cardinality: Cardinality = Cardinality.UNKNOWN
    definition: str = ""
    virtual: bool = False
    hide_for_er: bool = field(default=False, compare=False)


@dataclass
class DriverMeta:
    current_schema: str = ""
    search_paths: list[str] = field(default_factory=list)
    dictionary: Optional[dict[str, str]] = None


@dataclass
class Function:
    name: str
    return_type: str = ""
    arguments: str = ""
    type: str = ""


@dataclass
class Driver:
    name: str
    database_version: str = ""
    meta: Optional[DriverMeta] = None


@dataclass
class Schema:
    name: str = ""
    desc: str = ""
    tables: list[Table] = field(default_factory=list)
    relations: list[Relation] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    driver: Optional[Driver] = None
    labels: list[Label] = field(default_factory=list)

    def normalize_table_name(self, name: str) -> str:
        """Qualify a bare table name with the current schema where the driver needs it."""
        driver = self.driver
        if driver is not None and driver.name in _SCHEMA_QUALIFIED_DRIVERS and "." not in name:
            current = driver.meta.current_schema if driver.meta is not None else ""
            return f"{current}.{name}"
        return name

    def normalize_table_names(self, names) -> list[str]:
        return [self.normalize_table_name(n) for n in names]

    def find_table_by_name(self, name: str) -> Table:
        wanted = self.normalize_table_name(name)
        for table in self.tables:
            if self.normalize_table_name(table.name) == wanted:
                return table
        raise SchemaError(f"not found table '{name}'")

    def find_relation(self, columns, parent_columns) -> Relation:
        """Find the relation linking exactly these column objects."""
        columns = list(columns)
        parent_columns = list(parent_columns)

        def covered(mine, given) -> bool:
            return all(any(rc is c for c in given) for rc in mine)

        for relation in self.relations:
            if len(relation.columns) != len(columns) or len(relation.parent_columns) != len(parent_columns):
                continue
            if covered(relation.columns, columns) and covered(relation.parent_columns, parent_columns):
                return relation
        names = [c.name for c in columns]
        parent_names = [c.name for c in parent_columns]
        raise SchemaError(f"not found relation '{names}, {parent_names}'")

    def has_table_with_labels(self) -> bool:
        return any(t.labels for t in self.tables)

    def sort(self) -> None:
        """Sort tables, columns, indexes, constraints, triggers and relations by name."""
        for table in self.tables:
            for column in table.columns:
                column.parent_relations.sort(key=lambda r: r.table.name)
                column.child_relations.sort(key=lambda r: r.table.name)
            table.columns.sort(key=lambda c: c.name)
            table.indexes.sort(key=lambda i: i.name)
            table.constraints.sort(key=lambda c: c.name)
            table.triggers.sort(key=lambda t: t.name)
        self.tables.sort(key=lambda t: t.name)
        self.relations.sort(key=lambda r: r.table.name)

    def repair(self) -> None:
        """Relink relations and referenced tables to the schema's own objects.

        Raises SchemaError when a relation names a missing table or column.
        """
        for table in self.tables:
            resolved = []
            for ref in table.referenced_tables:
                try:
                    resolved.append(self.find_table_by_name(ref.name))
                except SchemaError:
                    ref.external = True
                    resolved.append(ref)
            table.referenced_tables = resolved

        for relation in self.relations:
            try:
                table = self.find_table_by_name(relation.table.name)
                for i, placeholder in enumerate(relation.columns):
                    column = table.find_column_by_name(placeholder.name)
                    column.parent_relations.append(relation)
                    relation.columns[i] = column
                relation.table = table
                parent = self.find_table_by_name(relation.parent_table.name)
                for i, placeholder in enumerate(relation.parent_columns):
                    column = parent.find_column_by_name(placeholder.name)
                    column.child_relations.append(relation)
                    relation.parent_columns[i] = column
                relation.parent_table = parent
            except SchemaError as err:
                raise SchemaError(f"failed to repair relation: {err}") from err