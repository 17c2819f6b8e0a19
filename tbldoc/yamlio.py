"""Conversion between schema objects and YAML-ready dictionaries."""

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
]


def _get(data: dict[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _labels_to_list(labels: list[Label]) -> list[dict[str, Any]]:
    return [{"name": label.name, "virtual": label.virtual} for label in labels]


def _labels_from_list(items: Optional[list[dict[str, Any]]]) -> list[Label]:
    return [
        Label(name=_get(item, "name", ""), virtual=bool(_get(item, "virtual", False)))
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
        name=_get(data, "name", ""),
        definition=_get(data, "def", ""),
        table=data.get("table"),
        columns=list(_get(data, "columns", [])),
        comment=_get(data, "comment", ""),
    )


def _constraint_to_dict(constraint: Constraint) -> dict[str, Any]:
    return {
        "name": constraint.name,
        "type": constraint.type,
        "def": constraint.definition,
        "table": constraint.table,
        "referencedTable": constraint.referenced_table,
        "columns": list(constraint.columns),
        "referencedColumns": list(constraint.referenced_columns),
        "comment": constraint.comment,
    }


def _constraint_from_dict(data: dict[str, Any]) -> Constraint:
    return Constraint(
        name=_get(data, "name", ""),
        type=_get(data, "type", ""),
        definition=_get(data, "def", ""),
        table=data.get("table"),
        referenced_table=data.get("referencedTable"),
        columns=list(_get(data, "columns", [])),
        referenced_columns=list(_get(data, "referencedColumns", [])),
        comment=_get(data, "comment", ""),
    )


def _trigger_to_dict(trigger: Trigger) -> dict[str, Any]:
    return {"name": trigger.name, "def": trigger.definition, "comment": trigger.comment}


def _trigger_from_dict(data: dict[str, Any]) -> Trigger:
    return Trigger(
        name=_get(data, "name", ""),
        definition=_get(data, "def", ""),
        comment=_get(data, "comment", ""),
    )


def column_to_dict(column: Column) -> dict[str, Any]:
    """Encode a column; relations and statistics are left out."""
    data: dict[str, Any] = {
        "name": column.name,
        "type": column.type,
        "nullable": column.nullable,
        "default": column.default,
    }
    if column.extra_def:
        data["extraDef"] = column.extra_def
    if column.labels:
        data["labels"] = _labels_to_list(column.labels)
    data["comment"] = column.comment
    return data


def column_from_dict(data: dict[str, Any]) -> Column:
    default = data.get("default")
    return Column(
        name=_get(data, "name", ""),
        type=_get(data, "type", ""),
        nullable=bool(_get(data, "nullable", False)),
        default=None if default is None else str(default),
        comment=_get(data, "comment", ""),
        extra_def=_get(data, "extraDef", ""),
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
        data["referencedTables"] = [t.name for t in table.referenced_tables]
    return data


def table_from_dict(data: dict[str, Any]) -> Table:
    """Decode a table; referenced tables come back as name-only placeholders."""
    return Table(
        name=_get(data, "name", ""),
        type=_get(data, "type", ""),
        comment=_get(data, "comment", ""),
        columns=[column_from_dict(c) for c in _get(data, "columns", [])],
        indexes=[_index_from_dict(i) for i in _get(data, "indexes", [])],
        constraints=[_constraint_from_dict(c) for c in _get(data, "constraints", [])],
        triggers=[_trigger_from_dict(t) for t in _get(data, "triggers", [])],
        definition=_get(data, "def", ""),
        labels=_labels_from_list(data.get("labels")),
        referenced_tables=[Table(name=n) for n in _get(data, "referencedTables", [])],
    )


def relation_to_dict(relation: Relation) -> dict[str, Any]:
    return {
        "table": relation.table.name,
        "columns": [c.name for c in relation.columns],
        "cardinality": str(relation.cardinality),
        "parentTable": relation.parent_table.name,
        "parentColumns": [c.name for c in relation.parent_columns],
        "parentCardinality": str(relation.parent_cardinality),
        "def": relation.definition,
        "virtual": relation.virtual,
    }


def relation_from_dict(data: dict[str, Any]) -> Relation:
    """Decode a relation with placeholder tables and columns.

    Raises ValueError on an unknown cardinality.
    """
    return Relation(
        table=Table(name=_get(data, "table", "")),
        columns=[Column(name=n) for n in _get(data, "columns", [])],
        cardinality=to_cardinality(_get(data, "cardinality", "")),
        parent_table=Table(name=_get(data, "parentTable", "")),
        parent_columns=[Column(name=n) for n in _get(data, "parentColumns", [])],
        parent_cardinality=to_cardinality(_get(data, "parentCardinality", "")),
        definition=_get(data, "def", ""),
        virtual=bool(_get(data, "virtual", False)),
    )


def _function_to_dict(function: Function) -> dict[str, Any]:
    return {
        "name": function.name,
        "returnType": function.return_type,
        "arguments": function.arguments,
        "type": function.type,
    }


def _function_from_dict(data: dict[str, Any]) -> Function:
    return Function(
        name=_get(data, "name", ""),
        return_type=_get(data, "returnType", ""),
        arguments=_get(data, "arguments", ""),
        type=_get(data, "type", ""),
    )


def _meta_to_dict(meta: Optional[DriverMeta]) -> Optional[dict[str, Any]]:
    if meta is None:
        return None
    data: dict[str, Any] = {}
    if meta.current_schema:
        data["currentSchema"] = meta.current_schema
    if meta.search_paths:
        data["searchPaths"] = list(meta.search_paths)
    if meta.dictionary is not None:
        data["dict"] = dict(meta.dictionary)
    return data


def _meta_from_dict(data: Optional[dict[str, Any]]) -> Optional[DriverMeta]:
    if data is None:
        return None
    dictionary = data.get("dict")
    return DriverMeta(
        current_schema=_get(data, "currentSchema", ""),
        search_paths=list(_get(data, "searchPaths", [])),
        dictionary=None if dictionary is None else dict(dictionary),
    )


def _driver_to_dict(driver: Optional[Driver]) -> Optional[dict[str, Any]]:
    if driver is None:
        return None
    return {
        "name": driver.name,
        "databaseVersion": driver.database_version,
        "meta": _meta_to_dict(driver.meta),
    }


def _driver_from_dict(data: Optional[dict[str, Any]]) -> Optional[Driver]:
    if data is None:
        return None
    return Driver(
        name=_get(data, "name", ""),
        database_version=_get(data, "databaseVersion", ""),
        meta=_meta_from_dict(data.get("meta")),
    )


def schema_to_dict(schema: Schema) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": schema.name,
        "desc": schema.desc,
        "tables": [table_to_dict(t) for t in schema.tables],
        "relations": [relation_to_dict(r) for r in schema.relations],
        "functions": [_function_to_dict(f) for f in schema.functions] or None,
        "driver": _driver_to_dict(schema.driver),
    }
    if schema.labels:
        data["labels"] = _labels_to_list(schema.labels)
    return data


def schema_from_dict(data: dict[str, Any]) -> Schema:
    """Decode a schema; call ``Schema.repair`` afterwards to relink relations."""
    return Schema(
        name=_get(data, "name", ""),
        desc=_get(data, "desc", ""),
        tables=[table_from_dict(t) for t in _get(data, "tables", [])],
        relations=[relation_from_dict(r) for r in _get(data, "relations", [])],
        functions=[_function_from_dict(f) for f in _get(data, "functions", [])],
        driver=_driver_from_dict(data.get("driver")),
        labels=_labels_from_list(data.get("labels")),
    )