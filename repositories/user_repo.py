"""
repositories/user_repo.py
--------------------------
Data access layer for application accounts.

Password hashes and TOTP secrets live in the users table but are never
selected here.

COPPA predicates (age threshold 13):
    minor            age < 13
    valid consent    minor AND consent date set AND consent no longer required
    without consent  minor AND (consent date missing OR consent still required)
The two consent predicates are written out separately rather than one
being derived as the negation of the other.
"""

from datetime import datetime
from typing import Optional, Sequence

from models.user import ADULT_AGE, COPPA_AGE, User, UserRole
from repositories.base import (
    BaseRepository,
    require,
    require_enum,
    require_positive,
)

_MINOR = f"age < {COPPA_AGE}"
_VALID_CONSENT = f"{_MINOR} AND parental_consent_date IS NOT NULL AND requires_parental_consent = FALSE"
_WITHOUT_CONSENT = f"{_MINOR} AND (parental_consent_date IS NULL OR requires_parental_consent = TRUE)"
_NAME_ORDER = "username ASC, id ASC"


class UserRepository(BaseRepository):
    """Read-only queries on the users table."""

    table = "users"
    model = User
    columns = (
        "id", "username", "email", "first_name", "last_name", "role",
        "enabled", "account_non_expired", "account_non_locked", "credentials_non_expired",
        "age", "requires_parental_consent", "parental_consent_date",
        "parental_consent_token", "parent_email", "mfa_enabled",
        "created_at", "updated_at", "last_login",
    )

    # ── IDENTITY ──────────────────────────────────────────

    def find_by_username(self, username: str) -> Optional[User]:
        require(username, "username")
        return self._fetch_one("find_by_username", self._select("username = %s", order_by=""), (username,))

    def find_by_email(self, email: str) -> Optional[User]:
        require(email, "email")
        return self._fetch_one("find_by_email", self._select("email = %s", order_by=""), (email,))

    def find_by_username_or_email(self, username: str, email: str) -> Optional[User]:
        """First account (by id) matching either the username or the email."""
        require(username, "username")
        require(email, "email")
        return self._fetch_one(
            "find_by_username_or_email",
            self._select("username = %s OR email = %s", limit=True),
            (username, email, 1),
        )

    def exists_by_username(self, username: str) -> bool:
        """Case-insensitive, matching the unique index on LOWER(username)."""
        require(username, "username")
        return self._exists("exists_by_username", "LOWER(username) = LOWER(%s)", (username,))

    def exists_by_email(self, email: str) -> bool:
        """Case-insensitive, matching the unique index on LOWER(email)."""
        require(email, "email")
        return self._exists("exists_by_email", "LOWER(email) = LOWER(%s)", (email,))

    # ── ROLES & STATUS ────────────────────────────────────

    def find_by_role(self, role: UserRole) -> list[User]:
        return self._fetch_all(
            "find_by_role", self._select("role = %s", order_by=_NAME_ORDER), (require_enum(role, UserRole, "role"),)
        )

    def count_by_role(self, role: UserRole) -> int:
        return self._count("count_by_role", "role = %s", (require_enum(role, UserRole, "role"),))

    def find_active_users_by_role(self, role: UserRole) -> list[User]:
        """Enabled accounts with the given role."""
        return self._fetch_all(
            "find_active_users_by_role",
            self._select("role = %s AND enabled = TRUE", order_by=_NAME_ORDER),
            (require_enum(role, UserRole, "role"),),
        )

    def find_by_enabled(self, enabled: bool) -> list[User]:
        require(enabled, "enabled")
        return self._fetch_all("find_by_enabled", self._select("enabled = %s", order_by=_NAME_ORDER), (enabled,))

    def count_enabled_users(self) -> int:
        return self._count("count_enabled_users", "enabled = TRUE")

    # ── PARENTAL CONSENT ──────────────────────────────────

    def find_by_parental_consent_token(self, token: str) -> Optional[User]:
        require(token, "token")
        return self._fetch_one(
            "find_by_parental_consent_token",
            self._select("parental_consent_token = %s", order_by=""),
            (token,),
        )

    def find_users_requiring_parental_consent(self) -> list[User]:
        return self._fetch_all(
            "find_users_requiring_parental_consent",
            self._select("requires_parental_consent = TRUE", order_by=_NAME_ORDER),
        )

    def find_by_parent_email(self, parent_email: str) -> list[User]:
        require(parent_email, "parent_email")
        return self._fetch_all(
            "find_by_parent_email",
            self._select("LOWER(parent_email) = LOWER(%s)", order_by=_NAME_ORDER),
            (parent_email,),
        )

    # ── AGE ───────────────────────────────────────────────

    def find_minor_users(self) -> list[User]:
        """Users under the COPPA age threshold."""
        return self._fetch_all("find_minor_users", self._select(_MINOR, order_by=_NAME_ORDER))

    def count_minor_users(self) -> int:
        return self._count("count_minor_users", _MINOR)

    def find_all_minors(self) -> list[User]:
        """Users under 18, not only those covered by COPPA."""
        return self._fetch_all(
            "find_all_minors", self._select("age < %s", order_by=_NAME_ORDER), (ADULT_AGE,)
        )

    def count_by_age_less_than(self, age: int) -> int:
        require_positive(age, "age")
        return self._count("count_by_age_less_than", "age < %s", (age,))

    def find_minors_with_valid_consent(self) -> list[User]:
        return self._fetch_all(
            "find_minors_with_valid_consent", self._select(_VALID_CONSENT, order_by=_NAME_ORDER)
        )

    def find_minors_without_consent(self) -> list[User]:
        return self._fetch_all(
            "find_minors_without_consent", self._select(_WITHOUT_CONSENT, order_by=_NAME_ORDER)
        )

    # ── MFA ───────────────────────────────────────────────

    def find_by_mfa_enabled(self, mfa_enabled: bool) -> list[User]:
        require(mfa_enabled, "mfa_enabled")
        return self._fetch_all(
            "find_by_mfa_enabled", self._select("mfa_enabled = %s", order_by=_NAME_ORDER), (mfa_enabled,)
        )

    def find_users_requiring_mfa(self, roles: Optional[Sequence[UserRole]] = None) -> list[User]:
        """
        Accounts whose role calls for MFA but which have not set it up.

        Defaults to every role for which ``UserRole.requires_mfa()`` is true.
        """
        if roles is None:
            roles = [r for r in UserRole if r.requires_mfa()]
        values = [require_enum(r, UserRole, "roles") for r in roles]
        if not values:
            return []
        return self._fetch_all(
            "find_users_requiring_mfa",
            self._select("role = ANY(%s::varchar[]) AND mfa_enabled = FALSE", order_by=_NAME_ORDER),
            (values,),
        )

    # ── ACTIVITY ──────────────────────────────────────────

    def find_recently_active_users(self, since: datetime) -> list[User]:
        """Users who logged in strictly after `since`, most recent first."""
        require(since, "since")
        return self._fetch_all(
            "find_recently_active_users",
            self._select("last_login > %s", order_by="last_login DESC, id ASC"),
            (since,),
        )

    def find_recently_created_users(self, since: datetime) -> list[User]:
        require(since, "since")
        return self._fetch_all(
            "find_recently_created_users",
            self._select("created_at > %s", order_by="created_at DESC, id ASC"),
            (since,),
        )

    # ── ACCOUNT SECURITY ──────────────────────────────────

    def find_locked_accounts(self) -> list[User]:
        return self._fetch_all("find_locked_accounts", self._select("account_non_locked = FALSE", order_by=_NAME_ORDER))

    def find_expired_accounts(self) -> list[User]:
        return self._fetch_all(
            "find_expired_accounts", self._select("account_non_expired = FALSE", order_by=_NAME_ORDER)
        )

    def find_expired_credentials(self) -> list[User]:
        return self._fetch_all(
            "find_expired_credentials", self._select("credentials_non_expired = FALSE", order_by=_NAME_ORDER)
        )
