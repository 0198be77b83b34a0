"""
XML output writer.

This module provides functionality to write diagnostic reports to XML format.
"""

from pathlib import Path
import xml.etree.ElementTree as ET

from loguru import logger

from ..core.data_structures import DiagnosticReport


class XmlWriter:
    """Writer for XML output format."""

    def write(self, report: DiagnosticReport, output_path: Path) -> None:
        """Write a diagnostic report to an XML file."""
        root = ET.Element("DiagnosticReport")
        metadata = ET.SubElement(root, "Metadata")
        ET.SubElement(metadata, "Target").text = report.target
        ET.SubElement(metadata, "GeneratorVersion").text = report.generator_version
        ET.SubElement(metadata, "DiagnosticCount").text = str(len(report.diagnostics))

        diagnostics_elem = ET.SubElement(root, "Diagnostics")
        for diagnostic in report.diagnostics:
            elem = ET.SubElement(diagnostics_elem, "Diagnostic")
            for key, value in diagnostic.to_dict().items():
                if value is not None:
                    ET.SubElement(elem, key).text = str(value)

        tree = ET.ElementTree(root)
        tree.write(output_path, encoding="utf-8", xml_declaration=True)
        logger.info(f"XML output written to {output_path}")
