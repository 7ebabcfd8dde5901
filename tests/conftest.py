from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models.mapping import MappingCreate
from app.services.audit import LoggingAuditSink
from app.stores.embedded_store import EmbeddedMappingStore


def make_mapping(code: str, confidence: float, **overrides: Any) -> Dict[str, Any]:
    data = {
        "namaste_code": code,
        "namaste_term": f"Term {code}",
        "category": "Ayurveda",
        "chapter_name": "General",
        "icd11_tm2_code": f"TM-{code}",
        "icd11_tm2_description": f"Description {code}",
        "icd11_biomedicine_code": None,
        "confidence_score": confidence,
    }
    data.update(overrides)
    return data


@pytest.fixture
def two_mappings() -> List[Dict[str, Any]]:
    return [
        make_mapping("AYU-001", 0.95, namaste_term="Kasa (Cough)", chapter_name="Respiratory System Disorders",
                     icd11_tm2_description="Traditional cough disorder", icd11_biomedicine_code="BB498"),
        make_mapping("AYU-002", 0.93, namaste_term="Shwasa (Asthma)", chapter_name="Respiratory System Disorders",
                     icd11_tm2_description="Traditional breathing disorder", icd11_biomedicine_code="BB499"),
    ]


@pytest.fixture
def mixed_mappings() -> List[Dict[str, Any]]:
    # Includes confidence ties to exercise the code tie-break
    return [
        make_mapping("SID-002", 0.90, category="Siddha", chapter_name="Fever Disorders", namaste_term="Suram (Fever)"),
        make_mapping("AYU-010", 0.90, chapter_name="Fever Disorders", namaste_term="Jwara (Fever)"),
        make_mapping("UNA-001", 0.75, category="Unani", chapter_name="Joint Disorders", namaste_term="Niqras (Gout)"),
        make_mapping("AYU-003", 0.88, chapter_name="Digestive Disorders", namaste_term="Arsha (Hemorrhoids)"),
        make_mapping("SID-001", 0.90, category="Siddha", chapter_name="Digestive Disorders", namaste_term="Pitham (Bile)"),
        make_mapping("AYU-004", 0.40, chapter_name="Digestive Disorders", namaste_term="Ajirna (Indigestion)",
                     icd11_tm2_code="", icd11_tm2_description=""),
        make_mapping("UNA-002", 1.0, category="Unani", chapter_name="Joint Disorders", namaste_term="Waja (Fever pain)"),
    ]


@pytest.fixture
def embedded_store(two_mappings) -> EmbeddedMappingStore:
    return EmbeddedMappingStore(seed=two_mappings)


@pytest.fixture
def audit_sink():
    sink = MagicMock(spec=LoggingAuditSink)
    sink.record = AsyncMock()
    return sink


def as_create(items: List[Dict[str, Any]]) -> List[MappingCreate]:
    return [MappingCreate.model_validate(i) for i in items]
