"""
Onboarding Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the onboarding domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import OnboardingRecord


# ============================================================================
# Command DTOs
# ============================================================================


class SubmitOnboardingCommand(BaseModel):
    """Business data entered by the invited organization contact"""

    company_name: str = Field(..., min_length=1, max_length=255)
    contact_person: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[dict] = None
    vessels: Optional[int] = None
    tax_id: str = Field(..., min_length=1, max_length=100)
    account_name: str = Field(..., min_length=1, max_length=255)
    bank_name: str = Field(..., min_length=1, max_length=255)
    iban: str = Field(..., min_length=1, max_length=64)
    swift: Optional[str] = Field(default=None, max_length=32)
    invoice_email: Optional[str] = Field(default=None, max_length=255)
    billing_address: Optional[dict] = None


# ============================================================================
# Response DTOs
# ============================================================================


class OnboardingInfo(BaseModel):
    """Onboarding record as returned to reviewers"""

    id: str
    organization_id: str
    company_name: str
    contact_person: str
    email: str
    vessels: Optional[int] = None
    status: str
    submitted_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    reviewer_id: Optional[str] = None
    reviewed_at: Optional[str] = None


class ReviewOnboardingResponse(BaseModel):
    """Response for approve onboarding use case"""

    onboarding: OnboardingInfo
    license_id: Optional[str] = None


class RejectOnboardingResponse(BaseModel):
    """Response for reject onboarding use case"""

    onboarding: OnboardingInfo


def to_onboarding_info(record: OnboardingRecord) -> OnboardingInfo:
    return OnboardingInfo(
        id=str(record.id),
        organization_id=str(record.organization_id),
        company_name=record.company_name,
        contact_person=record.contact_person,
        email=record.email,
        vessels=record.vessels,
        status=record.status.value,
        submitted_at=record.submitted_at.isoformat() if record.submitted_at else None,
        rejection_reason=record.rejection_reason,
        reviewer_id=str(record.reviewer_id) if record.reviewer_id else None,
        reviewed_at=record.reviewed_at.isoformat() if record.reviewed_at else None,
    )
