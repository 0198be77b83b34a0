#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration loading for the CMake error parser.
"""

from __future__ import annotations

import codecs
import json
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from loguru import logger

from ..core.enums import OutputFormat
from ..core.errors import ConfigurationError, ErrorContext


@dataclass
class ParserConfig:
    """Settings shared by the CLI, the widgets and the runner."""

    encoding: str = "utf-8"
    chunk_size: int = 4096
    echo: bool = False
    colorize: bool = True
    output_format: str = "json"
    target: str = "project"
    cmake_executable: str = "cmake"
    log_level: str = "INFO"

    # Supported configuration file extensions
    _SUPPORTED_EXTENSIONS = {
        ".json": "json",
        ".toml": "toml",
    }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], source_file: Union[Path, str, None] = None
    ) -> ParserConfig:
        """Create a validated configuration from a dictionary."""
        known = {f.name: f for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigurationError(
                    f"Unknown configuration option: {key}",
                    config_file=source_file,
                    invalid_option=key,
                )

        config = cls(**data)
        config.validate(source_file)
        return config

    def validate(self, source_file: Union[Path, str, None] = None) -> None:
        """Check option values, raising ConfigurationError on the first bad one."""
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ConfigurationError(
                f"chunk_size must be a positive integer, got {self.chunk_size!r}",
                config_file=source_file,
                invalid_option="chunk_size",
            )

        try:
            OutputFormat.from_string(self.output_format)
        except ValueError as e:
            raise ConfigurationError(
                str(e), config_file=source_file, invalid_option="output_format"
            ) from e

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(
                f"Unknown encoding: {self.encoding}",
                config_file=source_file,
                invalid_option="encoding",
            ) from e

    @classmethod
    def load_from_file(cls, file_path: Union[Path, str]) -> ParserConfig:
        """
        Load the configuration from a JSON or TOML file.

        Args:
            file_path: Path to the configuration file.

        Returns:
            ParserConfig: Validated configuration.

        Raises:
            ConfigurationError: If the file is missing, has an unsupported format
                or contains invalid options.
        """
        config_path = Path(file_path)

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_file=config_path,
                context=ErrorContext(working_directory=config_path.parent),
            )

        suffix = config_path.suffix.lower()
        if suffix not in cls._SUPPORTED_EXTENSIONS:
            supported = ", ".join(cls._SUPPORTED_EXTENSIONS.keys())
            raise ConfigurationError(
                f"Unsupported configuration file format: {suffix}. Supported formats: {supported}",
                config_file=config_path,
            )

        try:
            content = config_path.read_text(encoding="utf-8")
            logger.debug(f"Loading configuration from {config_path}")

            match cls._SUPPORTED_EXTENSIONS[suffix]:
                case "json":
                    data = json.loads(content)
                case _:
                    data = tomllib.loads(content)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Invalid configuration file: {e}", config_file=config_path, cause=e
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                config_file=config_path,
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be a table/object", config_file=config_path
            )

        return cls.from_dict(data, config_path)
