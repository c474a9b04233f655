"""Type mapping utilities for resolving declared column types to profile variants."""

import re

from tableprofile.models.profile import VariantTag

_TYPE_PARAMETERS = re.compile(r"\(.*\)$")


def _normalise_type_name(data_type: str) -> str:
    name = _TYPE_PARAMETERS.sub("", data_type.strip()).strip().lower()
    # Spark class names (IntegerType) reduce to their simple strings (integer)
    if name.endswith("type") and len(name) > len("type"):
        name = name[: -len("type")]
    return name


def map_to_variant_tag(data_type: str) -> VariantTag:
    """Map a declared column type to the variant it is profiled as.

    Accepts Spark simple strings, Spark class names and SQL type names.
    Parameterised types are matched on their base name.

    Args:
    ----
        data_type: Declared type (e.g., "int", "decimal(10,2)", "IntegerType", "VARCHAR")

    Returns:
    -------
        VariantTag (e.g., VariantTag.NUMERIC); unknown types map to GENERIC

    """
    mapping = {
        # numeric
        "byte": VariantTag.NUMERIC,
        "tinyint": VariantTag.NUMERIC,
        "short": VariantTag.NUMERIC,
        "smallint": VariantTag.NUMERIC,
        "int": VariantTag.NUMERIC,
        "integer": VariantTag.NUMERIC,
        "long": VariantTag.NUMERIC,
        "bigint": VariantTag.NUMERIC,
        "float": VariantTag.NUMERIC,
        "real": VariantTag.NUMERIC,
        "double": VariantTag.NUMERIC,
        "decimal": VariantTag.NUMERIC,
        "numeric": VariantTag.NUMERIC,
        # string
        "string": VariantTag.STRING,
        "varchar": VariantTag.STRING,
        "char": VariantTag.STRING,
        "text": VariantTag.STRING,
        # boolean
        "boolean": VariantTag.BOOLEAN,
        "bool": VariantTag.BOOLEAN,
        # timestamp
        "timestamp": VariantTag.TIMESTAMP,
        "timestamp_ntz": VariantTag.TIMESTAMP,
        "timestampntz": VariantTag.TIMESTAMP,
        "datetime": VariantTag.TIMESTAMP,
        "date": VariantTag.TIMESTAMP,
    }
    return mapping.get(_normalise_type_name(data_type), VariantTag.GENERIC)


def is_numeric_type(data_type: str) -> bool:
    """Return True if the declared type is profiled with numeric extras."""
    return map_to_variant_tag(data_type) is VariantTag.NUMERIC


__all__ = ["is_numeric_type", "map_to_variant_tag"]
