"""
Writer factory for diagnostic reports.

Each output format maps to one writer class and one file extension; the CLI
and the widgets derive both from the configured format through this module.
"""

from pathlib import Path
from typing import Dict, Type, Union

from ..core.data_structures import DiagnosticReport
from ..core.enums import OutputFormat
from .base import OutputWriter
from .json_writer import JsonWriter
from .csv_writer import CsvWriter
from .xml_writer import XmlWriter

FormatLike = Union[OutputFormat, str]


class WriterFactory:
    """Creates writers and report file names for an output format."""

    WRITERS: Dict[OutputFormat, Type[OutputWriter]] = {
        OutputFormat.JSON: JsonWriter,
        OutputFormat.CSV: CsvWriter,
        OutputFormat.XML: XmlWriter,
    }

    EXTENSIONS: Dict[OutputFormat, str] = {
        OutputFormat.JSON: ".json",
        OutputFormat.CSV: ".csv",
        OutputFormat.XML: ".xml",
    }

    @staticmethod
    def resolve_format(format_type: FormatLike) -> OutputFormat:
        if isinstance(format_type, OutputFormat):
            return format_type
        return OutputFormat.from_string(format_type)

    @classmethod
    def create_writer(cls, format_type: FormatLike) -> OutputWriter:
        """Create the writer for ``format_type``; unknown formats raise ValueError."""
        output_format = cls.resolve_format(format_type)
        try:
            writer_class = cls.WRITERS[output_format]
        except KeyError:
            raise ValueError(f"Unsupported output format: {format_type}") from None
        return writer_class()

    @classmethod
    def output_path(
        cls,
        base_name: Union[str, Path],
        format_type: FormatLike,
        directory: Union[str, Path] = ".",
    ) -> Path:
        """
        Path of the report file ``base_name`` in ``directory``.

        The format's extension is appended unless ``base_name`` already ends
        with it.
        """
        extension = cls.EXTENSIONS[cls.resolve_format(format_type)]
        path = Path(directory) / base_name
        if path.suffix.lower() != extension:
            path = path.with_name(path.name + extension)
        return path

    @classmethod
    def write_report(
        cls,
        report: DiagnosticReport,
        format_type: FormatLike,
        output_path: Union[str, Path],
    ) -> Path:
        """Write ``report`` with the writer for ``format_type`` and return the path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        cls.create_writer(format_type).write(report, output_path)
        return output_path
