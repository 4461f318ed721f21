"""
Result Models

Dataclass models for the required-files verification report.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from enum import Enum


class AppType(Enum):
    """Kind of project being deployed."""

    FRONTEND = "frontend"
    BACKEND = "backend"

    @property
    def label(self) -> str:
        return "FrontEnd" if self is AppType.FRONTEND else "BackEnd"

    @property
    def description(self) -> str:
        if self is AppType.FRONTEND:
            return "SPA/static application (Vue, React, etc.)"
        return "Python application (Django, Flask, etc.)"


@dataclass(frozen=True)
class RequiredFile:
    """A file the platform needs, with the content used by --fix."""

    name: str
    description: str
    template: Optional[str] = None

    @property
    def can_generate(self) -> bool:
        return self.template is not None


@dataclass
class FileCheck:
    """Presence check for one required file."""

    required: RequiredFile
    present: bool
    generated: bool = False

    @property
    def name(self) -> str:
        return self.required.name


@dataclass
class VerificationReport:
    """Result of checking a directory for deployment files."""

    directory: Path
    app_type: Optional[AppType]
    checks: list[FileCheck] = field(default_factory=list)
    fix: bool = False

    @property
    def type_detected(self) -> bool:
        return self.app_type is not None

    @property
    def missing(self) -> list[FileCheck]:
        return [c for c in self.checks if not c.present]

    @property
    def generated(self) -> list[FileCheck]:
        return [c for c in self.checks if c.generated]

    @property
    def remaining(self) -> list[FileCheck]:
        """Missing files that were not generated."""
        return [c for c in self.missing if not c.generated]

    @property
    def exit_code(self) -> int:
        """0 when the project is ready to deploy, 1 otherwise."""
        if not self.type_detected:
            return 1
        return 0 if not self.remaining else 1

    def __repr__(self) -> str:
        app_type = self.app_type.value if self.app_type else None
        return f"VerificationReport(type={app_type}, missing={len(self.missing)}, generated={len(self.generated)})"
