"""
Onboarding Use Cases

Submission and review of organization onboarding.
"""

from .approve_onboarding_use_case import ApproveOnboardingUseCase
from .dtos import (
    OnboardingInfo,
    RejectOnboardingResponse,
    ReviewOnboardingResponse,
    SubmitOnboardingCommand,
)
from .get_onboarding_use_case import GetOnboardingUseCase, ListOnboardingsUseCase
from .reject_onboarding_use_case import RejectOnboardingUseCase
from .submit_onboarding_use_case import SubmitOnboardingUseCase

__all__ = [
    "SubmitOnboardingUseCase",
    "ApproveOnboardingUseCase",
    "RejectOnboardingUseCase",
    "GetOnboardingUseCase",
    "ListOnboardingsUseCase",
    "SubmitOnboardingCommand",
    "OnboardingInfo",
    "ReviewOnboardingResponse",
    "RejectOnboardingResponse",
]
