"""Exporters for filtered problem views."""

from .writer import (
    EXPORT_FILENAME,
    EXPORT_MEDIA_TYPE,
    PREFERRED_COLUMNS,
    EmptyExportError,
    ExportDocument,
    build_export,
    export_columns,
    export_csv,
    write_export,
)

__all__ = [
    "EXPORT_FILENAME",
    "EXPORT_MEDIA_TYPE",
    "PREFERRED_COLUMNS",
    "EmptyExportError",
    "ExportDocument",
    "build_export",
    "export_columns",
    "export_csv",
    "write_export",
]
