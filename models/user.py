"""
models/user.py
--------------
Domain model for application accounts, including the fields used for
COPPA parental-consent tracking and account security state.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

COPPA_AGE = 13
ADULT_AGE = 18


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    MENTOR = "MENTOR"
    ADMIN = "ADMIN"
    PARENT = "PARENT"

    def requires_mfa(self) -> bool:
        return self in (UserRole.MENTOR, UserRole.ADMIN)


@dataclass
class User:
    """
    An application account.

    Password hashes and TOTP secrets are stored in the users table but are
    never loaded into this model.

    Attributes:
        username / email: Unique regardless of case.
        role: STUDENT, MENTOR, ADMIN or PARENT.
        enabled: False for disabled accounts.
        account_non_expired / account_non_locked / credentials_non_expired:
            Account security state; False means expired/locked.
        age: Self-reported age, used for COPPA checks.
        requires_parental_consent: Consent still outstanding.
        parental_consent_date: When a parent granted consent.
        parental_consent_token: One-time token sent to the parent.
        parent_email: Where the consent request goes.
        mfa_enabled: TOTP second factor configured.
    """
    username: str
    email: str
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    enabled: bool = True
    account_non_expired: bool = True
    account_non_locked: bool = True
    credentials_non_expired: bool = True
    age: Optional[int] = None
    requires_parental_consent: bool = False
    parental_consent_date: Optional[datetime] = None
    parental_consent_token: Optional[str] = None
    parent_email: Optional[str] = None
    mfa_enabled: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.role = UserRole(self.role)

    def is_minor(self) -> bool:
        """Under the COPPA age threshold."""
        return self.age is not None and self.age < COPPA_AGE

    def __str__(self) -> str:
        return f"{self.username} ({self.role.value})"
