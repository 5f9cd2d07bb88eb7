"""
License Use Cases

Manual issuance, lifecycle changes, usage counters and listing.
"""

from .change_license_status_use_case import ChangeLicenseStatusUseCase
from .dtos import LicenseInfo, UsageResponse
from .issue_license_use_case import IssueLicenseUseCase
from .list_licenses_use_case import ListLicensesUseCase
from .record_usage_use_case import ConsumeUsageUseCase, ReleaseUsageUseCase

__all__ = [
    "IssueLicenseUseCase",
    "ChangeLicenseStatusUseCase",
    "ConsumeUsageUseCase",
    "ReleaseUsageUseCase",
    "ListLicensesUseCase",
    "LicenseInfo",
    "UsageResponse",
]
