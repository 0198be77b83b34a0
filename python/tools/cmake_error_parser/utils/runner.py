#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Run CMake and parse its console output while it is produced.
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from loguru import logger

from ..core.data_structures import DiagnosticReport
from ..core.errors import ErrorContext, RunnerError
from ..emitters.base import TextSink
from ..emitters.store import DiagnosticStore
from ..parsers.stream import CMakeErrorParser
from .config import ParserConfig


@dataclass
class RunResult:
    """Data class to store the outcome of one CMake invocation."""

    exit_code: int
    report: DiagnosticReport
    execution_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.report.errors


class CMakeRunner:
    """
    Runs the CMake executable and streams its output through a parser.

    Diagnostics of the target are reset before each run, so the store only
    holds the diagnostics of the latest run.
    """

    def __init__(
        self,
        store: Optional[DiagnosticStore] = None,
        config: Optional[ParserConfig] = None,
        sink: Optional[TextSink] = None,
    ) -> None:
        self.store = store or DiagnosticStore()
        self.config = config or ParserConfig()
        self.sink = sink

    def build_command(self, args: Sequence[str]) -> List[str]:
        return [self.config.cmake_executable, *args]

    def run(
        self,
        args: Sequence[str],
        target: Optional[str] = None,
        cwd: Optional[Union[str, Path]] = None,
    ) -> RunResult:
        """
        Run CMake with ``args`` and parse its combined stdout and stderr.

        Args:
            args: Arguments passed to the CMake executable
            target: Name the diagnostics are recorded under
            cwd: Working directory of the process

        Returns:
            RunResult with the exit code and the diagnostics of this run

        Raises:
            RunnerError: If the executable cannot be started
        """
        target = target or self.config.target
        command = self.build_command(args)
        removed = self.store.reset_diagnostics(target)
        logger.info(f"Running {' '.join(command)} (cleared {removed} diagnostics)")

        start = time.monotonic()
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                cwd=cwd,
            )
        except OSError as e:
            raise RunnerError(
                f"Failed to start {command[0]}: {e}",
                context=ErrorContext(
                    command=" ".join(command),
                    working_directory=Path(cwd) if cwd else None,
                ),
                cause=e,
            ) from e

        with process, CMakeErrorParser(
            self.store, root=target, sink=self.sink, encoding=self.config.encoding
        ) as parser:
            for chunk in iter(lambda: process.stdout.read1(self.config.chunk_size), b""):
                parser.feed(chunk)
            exit_code = process.wait()

        execution_time = time.monotonic() - start
        report = self.store.report(target)
        logger.info(
            f"{command[0]} exited with {exit_code} after {execution_time:.2f}s: "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return RunResult(exit_code=exit_code, report=report, execution_time=execution_time)
