"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any


@dataclass
class DirectoryEntryDTO:
    """A user record read from the directory service"""
    dn: str = ""
    employee_id: str = ""
    display_name: str = ""
    email: str = ""
    sam_account_name: str = ""
    department: str = ""
    title: str = ""
    manager: str = ""
    office_location: str = ""
    phone: str = ""
    member_of: List[str] = field(default_factory=list)


@dataclass
class SyncResultDTO:
    """Outcome of a directory sync"""
    success: bool = True
    message: str = ""
    synced: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'message': self.message,
            'synced': self.synced,
            'created': self.created,
            'updated': self.updated,
            'skipped': self.skipped,
        }


@dataclass
class ImportResultDTO:
    """Outcome of a bulk asset import"""
    success: int = 0
    failed: int = 0
    total: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'failed': self.failed,
            'total': self.total,
            'errors': self.errors,
        }
