"""Diagnostic sink passed to the repository builders.

A sink forwards messages to a standard ``logging.Logger`` and keeps
them, so that callers can report per-column problems after a run.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message."""
    level: int
    message: str
    table: Optional[str] = None
    column: Optional[str] = None

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


class DiagnosticSink:
    """Collects diagnostics and forwards them to a logger.

    Example:
        sink = DiagnosticSink()
        assembler = RepositoryModelAssembler(rules, sink=sink)
        model = assembler.assemble(source)
        for d in sink.warnings:
            print(d.table, d.column, d.message)
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("dbrepo.repository")
        self.records: List[Diagnostic] = []

    def emit(self, level: int, message: str, table: Optional[str] = None, column: Optional[str] = None) -> None:
        self.records.append(Diagnostic(level, message, table, column))
        self.logger.log(level, message)

    def debug(self, message: str, **context) -> None:
        self.emit(logging.DEBUG, message, **context)

    def info(self, message: str, **context) -> None:
        self.emit(logging.INFO, message, **context)

    def warning(self, message: str, **context) -> None:
        self.emit(logging.WARNING, message, **context)

    def error(self, message: str, **context) -> None:
        self.emit(logging.ERROR, message, **context)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Diagnostics at WARNING level or above."""
        return [d for d in self.records if d.level >= logging.WARNING]

    def clear(self) -> None:
        self.records.clear()
