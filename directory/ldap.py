"""
Active Directory / LDAP client.

Reads connection settings from ``settings.LDAP`` (populated from the
LDAP_* environment variables) and talks to the server through ldap3.
Every operation opens its own connection, binds, and unbinds when done.
"""
import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from ldap3 import BASE, NONE, SUBTREE, Connection, Server
from ldap3.core.exceptions import LDAPException
from ldap3.utils.conv import escape_filter_chars

from core.constants import UserRole
from core.dto import DirectoryEntryDTO
from core.exceptions import DirectoryError

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ('URL', 'BASE_DN', 'BIND_DN', 'BIND_PASSWORD')
NOT_CONFIGURED_MESSAGE = (
    "LDAP not configured. Set LDAP_URL, LDAP_BASE_DN, LDAP_BIND_DN, "
    "and LDAP_BIND_PASSWORD environment variables."
)

# Excludes accounts with the ACCOUNTDISABLE bit set in userAccountControl
ENABLED_ACCOUNTS_FILTER = '(!(userAccountControl:1.2.840.113556.1.4.803:=2))'

USER_ATTRIBUTES = [
    'employeeID',
    'displayName',
    'mail',
    'sAMAccountName',
    'department',
    'title',
    'manager',
    'physicalDeliveryOfficeName',
    'telephoneNumber',
    'memberOf',
]

PAGE_SIZE = 500
TIMEOUT_SECONDS = 10


def get_ldap_config() -> Optional[Dict[str, Any]]:
    """Connection settings, or None unless URL, base DN and bind credentials are all set"""
    raw = getattr(settings, 'LDAP', {}) or {}
    if not all(raw.get(key) for key in REQUIRED_KEYS):
        return None
    return {
        'url': raw['URL'],
        'base_dn': raw['BASE_DN'],
        'bind_dn': raw['BIND_DN'],
        'bind_password': raw['BIND_PASSWORD'],
        'user_filter': raw.get('USER_FILTER') or '(objectClass=user)',
        'group_filter': raw.get('GROUP_FILTER') or '(objectClass=group)',
        'admin_group_dn': raw.get('ADMIN_GROUP_DN') or None,
        'user_group_dn': raw.get('USER_GROUP_DN') or None,
        'readonly_group_dn': raw.get('READONLY_GROUP_DN') or None,
    }


def is_ldap_configured() -> bool:
    return get_ldap_config() is not None


def _require_config() -> Dict[str, Any]:
    config = get_ldap_config()
    if config is None:
        raise DirectoryError(message="LDAP not configured", code="LDAP_NOT_CONFIGURED")
    return config


def _connect(config: Dict[str, Any], bind_dn: str, bind_password: str) -> Optional[Connection]:
    """Open and bind a connection; None when the credentials are rejected"""
    server = Server(config['url'], get_info=NONE, connect_timeout=TIMEOUT_SECONDS)
    conn = Connection(
        server,
        user=bind_dn,
        password=bind_password,
        auto_bind=False,
        receive_timeout=TIMEOUT_SECONDS,
    )
    if not conn.bind():
        logger.warning(f"LDAP bind failed for {bind_dn}: {conn.result.get('description')}")
        conn.unbind()
        return None
    return conn


def _service_connection(config: Dict[str, Any]) -> Connection:
    conn = _connect(config, config['bind_dn'], config['bind_password'])
    if conn is None:
        raise DirectoryError(message="Service account bind failed", code="LDAP_BIND_FAILED")
    return conn


def _first(value) -> str:
    """Single string out of an ldap3 attribute value (str, list or missing)"""
    if isinstance(value, (list, tuple)):
        value = next((item for item in value if item), '')
    if value is None:
        return ''
    return str(value)


def _as_list(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def _entry_to_dto(dn: str, attributes: Dict[str, Any]) -> DirectoryEntryDTO:
    return DirectoryEntryDTO(
        dn=dn,
        employee_id=_first(attributes.get('employeeID')),
        display_name=_first(attributes.get('displayName')),
        email=_first(attributes.get('mail')),
        sam_account_name=_first(attributes.get('sAMAccountName')),
        department=_first(attributes.get('department')),
        title=_first(attributes.get('title')),
        manager=_first(attributes.get('manager')),
        office_location=_first(attributes.get('physicalDeliveryOfficeName')),
        phone=_first(attributes.get('telephoneNumber')),
        member_of=_as_list(attributes.get('memberOf')),
    )


def _search_entries(conn: Connection, search_base, search_filter, scope=SUBTREE):
    """Paged search yielding (dn, attributes) for result entries only"""
    results = conn.extend.standard.paged_search(
        search_base=search_base,
        search_filter=search_filter,
        search_scope=scope,
        attributes=USER_ATTRIBUTES,
        paged_size=PAGE_SIZE,
        generator=True,
    )
    for item in results:
        if item.get('type') != 'searchResEntry':
            continue
        yield item['dn'], item.get('attributes', {})


def sync_all_users() -> List[DirectoryEntryDTO]:
    """
    Fetch every enabled user account from the directory.

    Entries without a display name, or with neither mail nor
    sAMAccountName, are skipped.
    """
    config = _require_config()
    search_filter = f"(&{config['user_filter']}{ENABLED_ACCOUNTS_FILTER})"

    try:
        conn = _service_connection(config)
        try:
            users = []
            for dn, attributes in _search_entries(conn, config['base_dn'], search_filter):
                entry = _entry_to_dto(dn, attributes)
                if entry.display_name and (entry.email or entry.sam_account_name):
                    users.append(entry)
        finally:
            conn.unbind()
    except LDAPException as e:
        raise DirectoryError(message=str(e), code="LDAP_ERROR") from e

    logger.info(f"LDAP search returned {len(users)} users")
    return users


def _find_user_dn(conn: Connection, config: Dict[str, Any], username: str) -> Optional[str]:
    escaped = escape_filter_chars(username)
    search_filter = (
        f"(&{config['user_filter']}"
        f"(|(sAMAccountName={escaped})(userPrincipalName={escaped})(mail={escaped})))"
    )
    conn.search(config['base_dn'], search_filter, search_scope=SUBTREE, attributes=['cn'], size_limit=1)
    if not conn.entries:
        return None
    return conn.entries[0].entry_dn


def authenticate_user(username: str, password: str) -> Optional[DirectoryEntryDTO]:
    """
    Verify directory credentials.

    Finds the user's DN with the service account, re-binds as the user, then
    reads the user's details. Returns None on unknown user or bad password.
    """
    config = _require_config()
    if not username or not password:
        return None

    try:
        conn = _service_connection(config)
        try:
            user_dn = _find_user_dn(conn, config, username)
        finally:
            conn.unbind()
        if not user_dn:
            return None

        user_conn = _connect(config, user_dn, password)
        if user_conn is None:
            return None
        user_conn.unbind()

        conn = _service_connection(config)
        try:
            entries = list(_search_entries(conn, user_dn, '(objectClass=*)', scope=BASE))
        finally:
            conn.unbind()
    except LDAPException as e:
        logger.error(f"LDAP authentication error for {username}: {e}")
        return None

    if not entries:
        return None
    dn, attributes = entries[0]
    return _entry_to_dto(dn, attributes)


def get_user_role(ldap_user: DirectoryEntryDTO, config: Dict[str, Any]) -> str:
    """admin, then readonly, then user, by case-insensitive group DN match on memberOf"""
    groups = [group.lower() for group in ldap_user.member_of]

    admin_group = config.get('admin_group_dn')
    if admin_group and any(admin_group.lower() in group for group in groups):
        return UserRole.ADMIN

    readonly_group = config.get('readonly_group_dn')
    if readonly_group and any(readonly_group.lower() in group for group in groups):
        return UserRole.READONLY

    return UserRole.USER


def test_connection() -> Dict[str, Any]:
    """Bind and count users: {success, message, user_count}"""
    if not is_ldap_configured():
        return {'success': False, 'message': NOT_CONFIGURED_MESSAGE, 'user_count': None}

    try:
        users = sync_all_users()
    except DirectoryError as e:
        return {
            'success': False,
            'message': f"Failed to connect to LDAP: {e.message}",
            'user_count': None,
        }

    return {
        'success': True,
        'message': f"Successfully connected to LDAP server. Found {len(users)} users.",
        'user_count': len(users),
    }
