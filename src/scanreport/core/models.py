"""Typed scan results consumed by the report writers.

Models mirror the JSON document the scanner emits, so a report can be built
either from Python objects or straight from ``Report.model_validate_json``.
PascalCase keys from the scanner output are accepted through field aliases.

Provides:
- Severity / Status: enums for finding severity and check status
- DependencyTreeItem: one node of a package's dependency-parent chain
- DetectedVulnerability / DetectedMisconfiguration: the two finding kinds
- Finding: discriminated union of both finding kinds
- Result: all findings for one scanned target
- Report: ordered collection of results
- RenderOptions: format selection, output sink and display switches
"""

import posixpath
import sys
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    """Severity levels, highest first."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Coerce free-form input to a Severity, falling back to UNKNOWN."""
        if isinstance(value, Severity):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.UNKNOWN


class Status(str, Enum):
    """Outcome of a single misconfiguration check."""

    PASS = "PASS"
    FAIL = "FAIL"
    EXCEPTION = "EXCEPTION"


class _ScanModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DependencyTreeItem(_ScanModel):
    """A package that pulled in its child, with the packages that pulled it in."""

    id: str = Field(alias="ID")
    parents: list["DependencyTreeItem"] = Field(default_factory=list, alias="Parents")

    @field_validator("parents", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value


class DetectedVulnerability(_ScanModel):
    """A vulnerable package found in a target.

    Attributes:
        vulnerability_id: Advisory identifier (e.g. CVE-2020-0001)
        pkg_id: Package identifier used in the origin graph (e.g. name@version)
        pkg_name: Package name
        pkg_path: Location of the package inside the target, if any
        installed_version: Version found in the target
        fixed_version: Fixed version(s), possibly a comma-separated list
        title: Short advisory title
        description: Long advisory description, used when title is empty
        severity: Severity level
        primary_url: Reference link for the advisory
        pkg_parents: Packages that depend on this package, up to the root
    """

    kind: Literal["vulnerability"] = "vulnerability"
    vulnerability_id: str = Field(default="", alias="VulnerabilityID")
    pkg_id: str = Field(default="", alias="PkgID")
    pkg_name: str = Field(default="", alias="PkgName")
    pkg_path: str = Field(default="", alias="PkgPath")
    installed_version: str = Field(default="", alias="InstalledVersion")
    fixed_version: str = Field(default="", alias="FixedVersion")
    title: str = Field(default="", alias="Title")
    description: str = Field(default="", alias="Description")
    severity: Severity = Field(default=Severity.UNKNOWN, alias="Severity")
    primary_url: str = Field(default="", alias="PrimaryURL")
    pkg_parents: list[DependencyTreeItem] = Field(default_factory=list, alias="PkgParents")

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value):
        return Severity.parse(value)

    @field_validator("pkg_parents", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    @property
    def library(self) -> str:
        """Package name, qualified by the file it was found in."""
        if self.pkg_path:
            return f"{self.pkg_name} ({posixpath.basename(self.pkg_path)})"
        return self.pkg_name

    @property
    def package_identifier(self) -> str:
        """Identifier shown in the origin graph."""
        if self.pkg_id:
            return self.pkg_id
        if self.installed_version:
            return f"{self.pkg_name}@{self.installed_version}"
        return self.pkg_name


class DetectedMisconfiguration(_ScanModel):
    """Outcome of one configuration check against a target."""

    kind: Literal["misconfiguration"] = "misconfiguration"
    type: str = Field(default="", alias="Type")
    id: str = Field(default="", alias="ID")
    title: str = Field(default="", alias="Title")
    message: str = Field(default="", alias="Message")
    severity: Severity = Field(default=Severity.UNKNOWN, alias="Severity")
    primary_url: str = Field(default="", alias="PrimaryURL")
    status: Status = Field(default=Status.FAIL, alias="Status")

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value):
        return Severity.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def failed(self) -> bool:
        return self.status == Status.FAIL


Finding = Annotated[
    Union[DetectedVulnerability, DetectedMisconfiguration],
    Field(discriminator="kind"),
]


class Result(_ScanModel):
    """All findings for one scanned target (file, image layer, ...)."""

    target: str = Field(default="", alias="Target")
    class_: str = Field(default="", alias="Class")
    type: str = Field(default="", alias="Type")
    vulnerabilities: list[DetectedVulnerability] = Field(
        default_factory=list, alias="Vulnerabilities"
    )
    misconfigurations: list[DetectedMisconfiguration] = Field(
        default_factory=list, alias="Misconfigurations"
    )

    @field_validator("vulnerabilities", "misconfigurations", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    @property
    def has_origin_chains(self) -> bool:
        return any(v.pkg_parents for v in self.vulnerabilities)


class Report(_ScanModel):
    """Ordered scan results for a whole scan."""

    results: list[Result] = Field(default_factory=list, alias="Results")

    @field_validator("results", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value


class RenderOptions(BaseModel):
    """Options for a single report write.

    Attributes:
        format: Name of the output format (only "table" ships here)
        output: Sink with a write() method; text or binary stream
        include_non_failures: Also show passing checks, adding a STATUS column
        light: Omit the TITLE column from vulnerability tables
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    format: str = "table"
    output: Any = Field(default_factory=lambda: sys.stdout)
    include_non_failures: bool = False
    light: bool = False
