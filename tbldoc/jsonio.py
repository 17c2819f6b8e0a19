"""Conversion between schema objects and JSON-ready dictionaries."""

from __future__ import annotations

from typing import Any, Optional

from tbldoc.cardinality import to_cardinality
from tbldoc.schema import (
    Column,
    Constraint,
    Driver,
    DriverMeta,
    Function,
    Index,
    Label,
    Relation,
    Schema,
    Table,
    Trigger,
)

__all__ = [
    "schema_to_dict",
    "schema_from_dict",
    "table_to_dict",
    "table_from_dict",
    "column_to_dict",
    "column_from_dict",
    "relation_to_dict",
    "relation_from_dict",
    "driver_to_dict",
    "function_to_dict",
]


def _get(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _labels_to_list(labels: list[Label]) -> list[dict[str, Any]]:
    return [{"Name": label.name, "Virtual": label.virtual} for label in labels]


def _labels_from_list(items: Optional[list[dict[str, Any]]]) -> list[Label]:
    return [
        Label(
            name=_get(item, "Name", "name", default=""),
            virtual=bool(_get(item, "Virtual", "virtual", default=False)),
        )
        for item in items or ()
    ]


def _index_to_dict(index: Index) -> dict[str, Any]:
    return {
        "name": index.name,
        "def": index.definition,
        "table": index.table,
        "columns": list(index.columns),
        "comment": index.comment,
    }


def _index_from_dict(data: dict[str, Any]) -> Index:
    return Index(
        name=_get(data, "name", default=""),
        definition=_get(data, "def", default=""),
        table=data.get("table"),
        columns=list(_get(data, "columns", default=[])),
        comment=_get(data, "comment", default=""),
    )


def _constraint_to_dict(constraint: Constraint) -> dict[str, Any]:
    return {
        "name": constraint.name,
        "type": constraint.type,
        "def": constraint.definition,
        "table": constraint.table,
        "referenced_table": constraint.referenced_table,
        "columns": list(constraint.columns),
        "referenced_columns": list(constraint.referenced_columns),
        "comment": constraint.comment,
    }


def _constraint_from_dict(data: dict[str, Any]) -> Constraint:
    return Constraint(
        name=_get(data, "name", default=""),
        type=_get(data, "type", default=""),
        definition=_get(data, "def", default=""),
        table=data.get("table"),
        referenced_table=data.get("referenced_table"),
        columns=list(_get(data, "columns", default=[])),
        referenced_columns=list(_get(data, "referenced_columns", default=[])),
        comment=_get(data, "comment", default=""),
    )


def _trigger_to_dict(trigger: Trigger) -> dict[str, Any]:
    return {"name": trigger.name, "def": trigger.definition, "comment": trigger.comment}


def _trigger_from_dict(data: dict[str, Any]) -> Trigger:
    return Trigger(
        name=_get(data, "name", default=""),
        definition=_get(data, "def", default=""),
        comment=_get(data, "comment", default=""),
    )


def column_to_dict(column: Column) -> dict[str, Any]:
    """Encode a column; relations and statistics are left out."""
    data: dict[str, Any] = {
        "name": column.name,
        "type": column.type,
        "nullable": column.nullable,
        "default": column.default,
    }
    if column.default is not None:
        if column.extra_def:
            data["extra_def"] = column.extra_def
        if column.labels:
            data["labels"] = _labels_to_list(column.labels)
        data["comment"] = column.comment
    else:
        data["comment"] = column.comment
        if column.extra_def:
            data["extra_def"] = column.extra_def
        if column.labels:
            data["labels"] = _labels_to_list(column.labels)
    return data


def column_from_dict(data: dict[str, Any]) -> Column:
    default = data.get("default")
    return Column(
        name=_get(data, "name", default=""),
        type=_get(data, "type", default=""),
        nullable=bool(_get(data, "nullable", default=False)),
        default=None if default is None else str(default),
        comment=_get(data, "comment", default=""),
        extra_def=_get(data, "extra_def", default=""),
        labels=_labels_from_list(data.get("labels")),
    )


def table_to_dict(table: Table) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": table.name,
        "type": table.type,
        "comment": table.comment,
        "columns": [column_to_dict(c) for c in table.columns],
        "indexes": [_index_to_dict(i) for i in table.indexes],
        "constraints": [_constraint_to_dict(c) for c in table.constraints],
        "triggers": [_trigger_to_dict(t) for t in table.triggers],
        "def": table.definition,
    }
    if table.labels:
        data["labels"] = _labels_to_list(table.labels)
    if table.referenced_tables:
        data["referenced_tables"] = [t.name for t in table.referenced_tables]
    return data


def table_from_dict(data: dict[str, Any]) -> Table:
    """Decode a table; referenced tables come back as name-only placeholders."""
    return Table(
        name=_get(data, "name", default=""),
        type=_get(data, "type", default=""),
        comment=_get(data, "comment", default=""),
        columns=[column_from_dict(c) for c in _get(data, "columns", default=[])],
        indexes=[_index_from_dict(i) for i in _get(data, "indexes", default=[])],
        constraints=[_constraint_from_dict(c) for c in _get(data, "constraints", default=[])],
        triggers=[_trigger_from_dict(t) for t in _get(data, "triggers", default=[])],
        definition=_get(data, "def", default=""),
        labels=_labels_from_list(data.get("labels")),
        referenced_tables=[Table(name=n) for n in _get(data, "referenced_tables", default=[])],
    )


def relation_to_dict(relation: Relation) -> dict[str, Any]:
    return {
        "table": relation.table.name,
        "columns": [c.name for c in relation.columns],
        "cardinality": str(relation.cardinality),
        "parent_table": relation.parent_table.name,
        "parent_columns": [c.name for c in relation.parent_columns],
        "parent_cardinality": str(relation.parent_cardinality),
        "def": relation.definition,
        "virtual": relation.virtual,
    }


def relation_from_dict(data: dict[str, Any]) -> Relation:
    """Decode a relation with placeholder tables and columns.

    Raises ValueError on an unknown cardinality.
    """
    return Relation(
        table=Table(name=_get(data, "table", default="")),
        columns=[Column(name=n) for n in _get(data, "columns", default=[])],
        cardinality=to_cardinality(_get(data, "cardinality", default="")),
        parent_table=Table(name=_get(data, "parent_table", default="")),
        parent_columns=[Column(name=n) for n in _get(data, "parent_columns", default=[])],
        parent_cardinality=to_cardinality(_get(data, "parent_cardinality", default="")),
        definition=_get(data, "def", default=""),
        virtual=bool(_get(data, "virtual", default=False)),
    )


def function_to_dict(function: Function) -> dict[str, Any]:
    return {
        "name": function.name,
        "return_type": function.return_type,
        "arguments": function.arguments,
        "type": function.type,
    }


def _function_from_dict(data: dict[str, Any]) -> Function:
    return Function(
        name=_get(data, "name", default=""),
        return_type=_get(data, "return_type", default=""),
        arguments=_get(data, "arguments", default=""),
        type=_get(data, "type", default=""),
    )


def _meta_to_dict(meta: Optional[DriverMeta]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if meta is None:
        return data
    if meta.current_schema:
        data["current_schema"] = meta.current_schema
    if meta.search_paths:
        data["search_paths"] = list(meta.search_paths)
    if meta.dictionary is not None:
        data["dict"] = dict(meta.dictionary)
    return data


def _meta_from_dict(data: Optional[dict[str, Any]]) -> Optional[DriverMeta]:
    if data is None:
        return None
    dictionary = data.get("dict")
    return DriverMeta(
        current_schema=_get(data, "current_schema", default=""),
        search_paths=list(_get(data, "search_paths", default=[])),
        dictionary=None if dictionary is None else dict(dictionary),
    )


def driver_to_dict(driver: Driver) -> dict[str, Any]:
    return {
        "name": driver.name,
        "database_version": driver.database_version,
        "meta": _meta_to_dict(driver.meta),
    }


def _driver_from_dict(data: Optional[dict[str, Any]]) -> Optional[Driver]:
    if data is None:
        return None
    return Driver(
        name=_get(data, "name", default=""),
        database_version=_get(data, "database_version", default=""),
        meta=_meta_from_dict(data.get("meta")),
    )


def schema_to_dict(schema: Schema) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": schema.name,
        "desc": schema.desc,
        "tables": [table_to_dict(t) for t in schema.tables],
        "relations": [relation_to_dict(r) for r in schema.relations],
        "functions": [function_to_dict(f) for f in schema.functions] or None,
        "driver": driver_to_dict(schema.driver) if schema.driver is not None else None,
    }
    if schema.labels:
        data["labels"] = _labels_to_list(schema.labels)
    return data


def schema_from_dict(data: dict[str, Any]) -> Schema:
    """Decode a schema; call ``Schema.repair`` afterwards to relink relations."""
    return Schema(
        name=_get(data, "name", default=""),
        desc=_get(data, "desc", default=""),
        tables=[table_from_dict(t) for t in _get(data, "tables", default=[])],
        relations=[relation_from_dict(r) for r in _get(data, "relations", default=[])],
        functions=[_function_from_dict(f) for f in _get(data, "functions", default=[])],
        driver=_driver_from_dict(data.get("driver")),
        labels=_labels_from_list(data.get("labels")),
    )