"""Human and machine readable dumps of transition tables."""

from deepchain.reporting.table_export import (
    chain_from_document,
    format_table,
    print_table,
    read_table,
    table_to_document,
    write_table,
)

__all__ = [
    "chain_from_document",
    "format_table",
    "print_table",
    "read_table",
    "table_to_document",
    "write_table",
]
