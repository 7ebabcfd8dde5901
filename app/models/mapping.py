"""
Mapping Data Models

Pydantic models for NAMASTE to ICD-11 terminology mappings:
- Category: The three AYUSH systems a mapping can belong to
- MappingCreate: Schema accepted from bulk loads and the API
- MappingRecord: A stored mapping, with store-managed timestamps
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    AYURVEDA = "Ayurveda"
    SIDDHA = "Siddha"
    UNANI = "Unani"


# Fields a text token is matched against
SEARCHABLE_FIELDS = (
    "namaste_term",
    "namaste_code",
    "icd11_tm2_description",
    "icd11_biomedicine_code",
    "chapter_name",
)


class MappingCreate(BaseModel):
    """A mapping as supplied by a bulk load or an API client."""

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    namaste_code: str = Field(..., min_length=1, description="Unique NAMASTE code, e.g. AYU-001")
    namaste_term: str = Field(..., min_length=1, description="Traditional term, optionally with an English gloss")
    category: Category = Field(..., description="AYUSH system")
    chapter_name: str = Field("", description="Free-text grouping label")
    icd11_tm2_code: str = Field("", description="ICD-11 TM2 code; empty for an unmapped placeholder")
    icd11_tm2_description: str = Field("", description="ICD-11 TM2 description")
    icd11_biomedicine_code: Optional[str] = Field(None, description="ICD-11 biomedicine code")
    confidence_score: float = Field(..., ge=0.0, le=1.0, description="Mapping confidence")

    @field_validator("namaste_code", "namaste_term", "chapter_name", "icd11_tm2_code", "icd11_tm2_description")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip() if v else v

    @property
    def is_mapped(self) -> bool:
        return bool(self.icd11_tm2_code)


class MappingRecord(MappingCreate):
    """A mapping as held by a store."""

    created_at: Optional[datetime] = Field(None, description="Set by the store on insert")
    updated_at: Optional[datetime] = Field(None, description="Set by the store on insert/update")

    def searchable_text(self) -> tuple[str, ...]:
        return tuple((getattr(self, name) or "").lower() for name in SEARCHABLE_FIELDS)
