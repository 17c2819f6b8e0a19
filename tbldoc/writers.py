"""Writers and readers for JSON and YAML schema documents."""

from __future__ import annotations

import json
from typing import IO, Any

import yaml

from tbldoc import jsonio, yamlio
from tbldoc.schema import Schema, Table

__all__ = [
    "JsonWriter",
    "YamlWriter",
    "read_json_schema",
    "read_yaml_schema",
]

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode_json(data: Any, inline: bool) -> str:
    if inline:
        text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    else:
        text = json.dumps(data, ensure_ascii=False, indent=2)
    for char, replacement in _HTML_ESCAPES.items():
        text = text.replace(char, replacement)
    return text + "\n"


class JsonWriter:
    """Write schemas and tables as JSON, indented unless ``inline``."""

    def __init__(self, inline: bool = False) -> None:
        self.inline = inline

    def output_schema(self, stream: IO[str], schema: Schema) -> None:
        stream.write(_encode_json(jsonio.schema_to_dict(schema), self.inline))

    def output_table(self, stream: IO[str], table: Table) -> None:
        stream.write(_encode_json(jsonio.table_to_dict(table), self.inline))


class _Dumper(yaml.SafeDumper):
    def ignore_aliases(self, data: Any) -> bool:
        return True


def _encode_yaml(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=_Dumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


class YamlWriter:
    """Write schemas and tables as YAML."""

    def output_schema(self, stream: IO[str], schema: Schema) -> None:
        stream.write(_encode_yaml(yamlio.schema_to_dict(schema)))

    def output_table(self, stream: IO[str], table: Table) -> None:
        stream.write(_encode_yaml(yamlio.table_to_dict(table)))


def read_json_schema(stream: IO[str]) -> Schema:
    """Read a JSON schema document and relink its relations.

    Raises ValueError on malformed JSON or an unknown cardinality, and
    SchemaError when a relation names a missing table or column.
    """
    schema = jsonio.schema_from_dict(json.load(stream))
    schema.repair()
    return schema


def read_yaml_schema(stream: IO[str]) -> Schema:
    """Read a YAML schema document and relink its relations.

    Raises yaml.YAMLError on malformed YAML, ValueError on an unknown
    cardinality, and SchemaError when a relation cannot be linked.
    """
    schema = yamlio.schema_from_dict(yaml.safe_load(stream) or {})
    schema.repair()
    return schema