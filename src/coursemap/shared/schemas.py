"""
Schemas Module - Pydantic data models for the course map.
=========================================================

Defines the data contract produced by the extraction engine and consumed by
the rendering layer:
- Compliance status and score per module
- Module element counts
- The course record with its ordered module list

Serialized documents use the camelCase field name ``qmCompliance``; Python
code uses ``qm_compliance``. Both are accepted on input.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────


class ComplianceStatus(str, Enum):
    """QM-style compliance classification of a module."""

    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non-compliant"


class ItemType(str, Enum):
    """Kind of element inside a module."""

    OBJECTIVE = "objective"
    ACTIVITY = "activity"
    ASSESSMENT = "assessment"
    CONTENT = "content"


_STATUS_LABELS = {
    ComplianceStatus.COMPLIANT.value: "QM Compliant",
    ComplianceStatus.PARTIAL.value: "Partially Compliant",
    ComplianceStatus.NON_COMPLIANT.value: "Non-Compliant",
}


# ─────────────────────────────────────────────────────────────────────────────
# Module Models
# ─────────────────────────────────────────────────────────────────────────────


class QMCompliance(BaseModel):
    """Compliance status with its score in [0, 100]."""

    status: ComplianceStatus = Field(..., description="Compliance status")
    score: int = Field(..., ge=0, le=100, description="Compliance score (0-100)")

    model_config = {"use_enum_values": True, "frozen": True}

    def label(self) -> str:
        """Human-readable label, e.g. ``'Partially Compliant (78%)'``."""
        return f"{_STATUS_LABELS.get(self.status, 'Not Evaluated')} ({self.score}%)"


class ModuleItem(BaseModel):
    """A single objective, activity, assessment or content element of a module."""

    id: str = Field(..., description="Item identifier")
    title: str = Field(..., description="Item title")
    type: ItemType = Field(..., description="Item kind")
    content: Optional[str] = Field(default=None, description="Optional body text")

    model_config = {"use_enum_values": True, "frozen": True}


class Module(BaseModel):
    """
    One course module with its element counts and compliance metadata.

    ``items`` is reserved for richer extraction and is left unset by the
    engine.
    """

    id: str = Field(..., description="Module identifier (module-<n>)")
    name: str = Field(..., description="Display name, prefixed 'Module <n>: '")
    qm_compliance: QMCompliance = Field(..., alias="qmCompliance")
    objectives: int = Field(default=0, ge=0, description="Learning objective count")
    activities: int = Field(default=0, ge=0, description="Activity count")
    assessments: int = Field(default=0, ge=0, description="Assessment count")
    items: Optional[tuple[ModuleItem, ...]] = Field(default=None)

    model_config = {"frozen": True, "populate_by_name": True}


# ─────────────────────────────────────────────────────────────────────────────
# Course Model
# ─────────────────────────────────────────────────────────────────────────────


class CourseData(BaseModel):
    """
    The parsed course: title, short code and modules in discovery order.

    Created once per parse and immutable afterwards. Module ids must run
    ``module-1``, ``module-2``, ... without gaps.
    """

    title: str = Field(..., description="Course title")
    code: str = Field(..., description="Short course code (e.g. 'ITB123')")
    modules: tuple[Module, ...] = Field(..., min_length=1, description="Ordered modules")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_module_ids(self) -> "CourseData":
        for number, module in enumerate(self.modules, start=1):
            expected = f"module-{number}"
            if module.id != expected:
                raise ValueError(
                    f"Module ids must be sequential: expected '{expected}', got '{module.id}'"
                )
        return self

    def overall_score(self) -> int:
        """Mean module score, rounded half up."""
        total = sum(module.qm_compliance.score for module in self.modules)
        return math.floor(total / len(self.modules) + 0.5)

    def status_counts(self) -> dict[str, int]:
        """Number of modules per compliance status."""
        counts = {status.value: 0 for status in ComplianceStatus}
        for module in self.modules:
            counts[module.qm_compliance.status] += 1
        return counts

    def get_module(self, module_id: str) -> Optional[Module]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def to_document(self) -> dict[str, Any]:
        """Convert to the JSON-compatible document consumed by the renderer."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "CourseData":
        """Build a CourseData from its document form."""
        return cls.model_validate(document)
