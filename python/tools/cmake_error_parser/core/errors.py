#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for the CMake error parser with structured error context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger


@dataclass(frozen=True)
class ErrorContext:
    """Context information for parser errors."""

    command: Optional[str] = None
    exit_code: Optional[int] = None
    working_directory: Optional[Path] = None
    additional_info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for structured logging."""
        return {
            "command": self.command,
            "exit_code": self.exit_code,
            "working_directory": (
                str(self.working_directory) if self.working_directory else None
            ),
            "additional_info": self.additional_info,
        }


class CMakeParserError(Exception):
    """
    Base exception class for the CMake error parser.

    Carries an :class:`ErrorContext` and logs itself with that context when
    raised, so failures reported by the CLI and the runner are traceable.
    Subclasses for recoverable failures lower ``log_level``.
    """

    log_level = "ERROR"

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.cause = cause

        logger.log(
            self.log_level,
            f"{type(self).__name__}: {message}",
            extra={
                "error_context": self.context.to_dict(),
                "original_cause": str(cause) if cause else None,
            },
        )

    def __str__(self) -> str:
        base_msg = super().__str__()

        if self.context.command:
            base_msg += f"\nCommand: {self.context.command}"

        if self.context.exit_code is not None:
            base_msg += f"\nExit Code: {self.context.exit_code}"

        if self.cause:
            base_msg += f"\nCaused by: {self.cause}"

        return base_msg


class ConfigurationError(CMakeParserError):
    """Exception raised for an invalid parser configuration."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Optional[Union[str, Path]] = None,
        invalid_option: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        additional_info: Dict[str, Any] = {}
        if config_file:
            additional_info["config_file"] = str(config_file)
        if invalid_option:
            additional_info["invalid_option"] = invalid_option

        context = kwargs.pop("context", None) or ErrorContext()
        kwargs["context"] = ErrorContext(
            command=context.command,
            exit_code=context.exit_code,
            working_directory=context.working_directory,
            additional_info={**context.additional_info, **additional_info},
        )
        self.config_file = config_file
        self.invalid_option = invalid_option

        super().__init__(message, **kwargs)


class DiagnosticCreationError(CMakeParserError):
    """Exception raised when a diagnostic store rejects a diagnostic."""

    # the streaming path skips the message and carries on
    log_level = "WARNING"

    def __init__(
        self,
        message: str,
        *,
        target: Optional[str] = None,
        file_path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        additional_info: Dict[str, Any] = {}
        if target:
            additional_info["target"] = target
        if file_path:
            additional_info["file"] = file_path

        kwargs.setdefault("context", ErrorContext(additional_info=additional_info))
        self.target = target
        self.file_path = file_path

        super().__init__(message, **kwargs)


class RunnerError(CMakeParserError):
    """Exception raised when the build tool process cannot be run."""
