"""Database schema model, JSON/YAML serialisation and documentation template helpers."""

__version__ = "1.65.3"

__all__ = ["cardinality", "schema", "jsonio", "yamlio", "templatefuncs", "sample", "writers"]