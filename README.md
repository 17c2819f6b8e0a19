# tbldoc

tbldoc holds a database schema in memory. A schema has tables, columns,
indexes, constraints, triggers, relations, functions and driver
information. The package also provides the pieces you need to document a
schema.

## Modules

### `tbldoc.schema`

This module holds the dataclasses: `Schema`, `Table`, `Column`, `Index`,
`Constraint`, `Trigger`, `Relation`, `Function`, `Driver`, `DriverMeta` and
`Label`.

**Lookups.** The lookup methods raise `SchemaError` when nothing matches.
`SchemaError` is a `LookupError`. The lookup methods are:

- `Schema.find_table_by_name`
- `Schema.find_relation`
- `Table.find_column_by_name`
- `Table.find_index_by_name`
- `Table.find_constraint_by_name`
- `Table.find_trigger_by_name`

**Table names.** `Schema.normalize_table_name` prefixes a bare table name
with the driver's current schema, but only for the `postgres` and `redshift`
drivers. `Schema.normalize_table_names` does the same for a list of names.

**Repair.** `Schema.repair()` replaces the placeholder tables and columns in
each relation with the schema's own objects. It also fills in each column's
`parent_relations` and `child_relations`. A referenced table that is not in
the schema is marked `external`. If a relation names a missing table or
column, `repair()` raises `SchemaError`.

**Sorting.** `Schema.sort()` sorts the following by name:

- tables, columns, indexes, constraints and triggers;
- relations, by the name of their table;
- each column's relation lists, by the name of their table.

**Neighbourhoods.** `Table.collect_tables_and_relations(distance, root)`
returns the tables and relations within `distance` hops of a table, as a
pair of lists. With `root` true, both lists are free of duplicates.

**Columns shown in documentation.** `Table.show_column(name, hide_columns)`
decides whether a column attribute appears in documentation. Attributes in
`DEFAULT_HIDE_COLUMNS`, or in `hide_columns`, are shown only when some
column carries a value for them. `Table.has_column_with_values` makes that
check.

**Labels.** `merge_label(labels, name)` adds a virtual label if no label of
that name is present yet.

### `tbldoc.cardinality`

This module holds the `Cardinality` enum and `to_cardinality`.
`to_cardinality` accepts the names and common aliases, ignoring case, for
example `"0..*"`, `"one or many"` and `"1"`. An unknown value raises
`ValueError`.

### `tbldoc.jsonio` and `tbldoc.yamlio`

These two modules convert between schema objects and plain dictionaries.
JSON uses snake_case keys and YAML uses camelCase keys. The functions are
`schema_to_dict`, `schema_from_dict`, `table_to_dict`, `table_from_dict`,
`column_to_dict`, `column_from_dict`, `relation_to_dict` and
`relation_from_dict`. `jsonio` also has `driver_to_dict` and
`function_to_dict`.

Decoded relations and referenced tables hold name-only placeholders. Call
`Schema.repair()` to link them to the schema's own objects.

### `tbldoc.writers`

- `JsonWriter(inline=False)` writes a schema or a table as JSON. Output is
  indented by default. The characters `<`, `>` and `&` are escaped as
  `\u003c`, `\u003e` and `\u0026`.
- `YamlWriter` writes a schema or a table as YAML.
- `read_json_schema(stream)` and `read_yaml_schema(stream)` read a document
  and repair it before returning it.

### `tbldoc.templatefuncs`

This module holds text helpers for documentation templates:

- Line-break helpers: `nl2br`, `nl2br_slash`, `nl2mdnl`, `nl2space` and
  `escape_nl`.
- `show_only_first_paragraph` returns the text up to the first blank line.
- `label_join` renders label names as code spans.
- `escape` percent-encodes text for Markdown links.
- `escape_mermaid` replaces characters that Mermaid identifiers cannot hold.
- `lcardi` and `rcardi` return Mermaid relation markers.

`template_funcs(lookup)` returns all of these helpers in a single dict. The
dict also has a `lookup` translator. You can pass `lookup` as a callable or
as a mapping. If you pass a mapping, words it does not contain are returned
unchanged.

### `tbldoc.sample`

`new_schema()` builds a small two-table schema, `testschema`, in which
column `b.b` references `a.a`.

## Installation

```
pip install tbldoc
```

## Example

```python
import io

from tbldoc.sample import new_schema
from tbldoc.writers import JsonWriter, read_json_schema

buf = io.StringIO()
JsonWriter().output_schema(buf, new_schema())

buf.seek(0)
restored = read_json_schema(buf)  # already repaired

table_b = restored.find_table_by_name("b")
tables, relations = table_b.collect_tables_and_relations(1, True)
print([t.name for t in tables])  # ['b', 'a']
```

## What it does not do

tbldoc does not connect to databases or read their catalogues. You build a
schema in code or load it from JSON or YAML. The package also does not
render Markdown pages, ER diagrams or spreadsheets. It provides the model
and the template helpers for those jobs. There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```