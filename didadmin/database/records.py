# didadmin/database/records.py
# -*- coding: utf-8 -*-
"""
Record types held by the record stores.

Attributes are snake_case; the persisted/JSON representation is camelCase and is
produced by the marshmallow schemas in ``didadmin.api.schemas``.
"""
from dataclasses import dataclass, field
from datetime import date, datetime

DID_STATUSES = ('active', 'inactive', 'pending')
DIALB_STATUSES = ('Clean', 'Spam')


@dataclass
class DidRecord:
    """A Direct Inward Dial number provisioned on a carrier trunk."""
    id: str = ''
    provider: str = ''
    did_number: str = ''
    trunk_id: str = ''
    did_forward: str = ''
    # area_code and state are derived from did_number but stored with the record
    area_code: str = ''
    state: str = ''
    company_code: str = ''
    company_name: str = ''
    status: str = 'active'
    assigned_date: date | None = None
    last_updated: date | None = None


@dataclass
class AreaCodeRecord:
    id: str = ''
    code: str = ''
    region: str = ''
    state: str = ''
    timezone: str = ''
    # Aggregates; only refreshed by AreaCodeService.recompute_did_counts()
    total_dids: int = 0
    active_dids: int = 0


@dataclass
class CompanyRecord:
    id: str = ''
    company_code: str = ''
    name: str = ''
    description: str = ''
    created_date: date | None = None
    last_updated: date | None = None


@dataclass
class DialBRecord:
    """Spam/clean reputation of a phone number, flagged per carrier."""
    id: str = ''
    phone_number: str = ''
    group: str = ''
    overall_status: str = 'Clean'
    tmobile_flag: bool = False
    att_flag: bool = False
    third_party_flag: bool = False
    last_checked: str = ''
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class UploadRecord:
    id: str = ''
    original_name: str = ''
    upload_type: str = ''
    total_processed: int = 0
    success_count: int = 0
    duplicate_count: int = 0
    skipped_count: int = 0
    upload_date: datetime | None = None


@dataclass
class ImportResult:
    """Outcome of a DID import: accepted records, duplicates and skipped rows."""
    successful: list = field(default_factory=list)
    duplicates: list = field(default_factory=list)
    total_processed: int = 0
    # Data rows without a DID number; included in total_processed
    skipped_count: int = 0

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)
