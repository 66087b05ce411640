"""Closed vocabularies shared by the entity schemas.

Every enumerated field in the package draws its values from this module so the
frontend and backend agree on one frozen vocabulary per concept. Values are the
exact strings that travel on the wire.

Security Impact:
    - Values outside these sets are rejected at validation time
    - Permission tokens are vocabulary only; no authorization decision is made here
"""

from enum import Enum


class Permission(str, Enum):
    """Permission tokens a role may grant (``<resource>_<action>`` plus admin tokens)."""

    USER_READ = "user_read"
    USER_CREATE = "user_create"
    USER_UPDATE = "user_update"
    USER_DELETE = "user_delete"

    PATIENT_READ = "patient_read"
    PATIENT_CREATE = "patient_create"
    PATIENT_UPDATE = "patient_update"
    PATIENT_DELETE = "patient_delete"

    COMPANY_READ = "company_read"
    COMPANY_CREATE = "company_create"
    COMPANY_UPDATE = "company_update"
    COMPANY_DELETE = "company_delete"

    HISTORIA_READ = "historia_read"
    HISTORIA_CREATE = "historia_create"
    HISTORIA_UPDATE = "historia_update"
    HISTORIA_DELETE = "historia_delete"

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    USER_MANAGEMENT = "user_management"

    REPORTS_READ = "reports_read"
    ANALYTICS_READ = "analytics_read"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class InvitationStatus(str, Enum):
    """Invitation lifecycle. ``pending`` is the only non-terminal state."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING

    def can_transition_to(self, target: "InvitationStatus") -> bool:
        """Return True if ``target`` is a legal next state.

        Once resolved, an invitation never changes state again.
        """
        return self is InvitationStatus.PENDING and target is not InvitationStatus.PENDING


class InvitationRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    VIEWER = "viewer"


class InvitationResponse(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"

    @property
    def resulting_status(self) -> InvitationStatus:
        if self is InvitationResponse.ACCEPT:
            return InvitationStatus.ACCEPTED
        return InvitationStatus.DECLINED


class NotificationType(str, Enum):
    """Lifecycle events that produce a notification.

    The legacy ``*_client`` values are translated by
    :mod:`medschemas.domain.compat` and are not members.
    """

    INVITATION_RECEIVED = "invitation_received"
    INVITATION_ACCEPTED = "invitation_accepted"
    INVITATION_DECLINED = "invitation_declined"
    USER_JOINED_ORGANIZATION = "user_joined_organization"
    USER_LEFT_ORGANIZATION = "user_left_organization"
    ORGANIZATION_CREATED = "organization_created"
    ROLE_CHANGED = "role_changed"


class RelatedEntityType(str, Enum):
    INVITATION = "invitation"
    USER = "user"
    ORGANIZATION = "organization"


class Sector(str, Enum):
    """Industry sector of a company."""

    CONSTRUCCION = "construccion"
    MANUFACTURA = "manufactura"
    SERVICIOS = "servicios"
    TECNOLOGIA = "tecnologia"
    SALUD = "salud"
    EDUCACION = "educacion"
    RETAIL = "retail"
    ALIMENTARIO = "alimentario"
    LOGISTICA = "logistica"
    OTROS = "otros"


class SectorFilter(str, Enum):
    """Sector values accepted by company filters (``todos`` disables the filter)."""

    TODOS = "todos"
    CONSTRUCCION = "construccion"
    MANUFACTURA = "manufactura"
    SERVICIOS = "servicios"
    TECNOLOGIA = "tecnologia"
    SALUD = "salud"
    EDUCACION = "educacion"
    RETAIL = "retail"
    ALIMENTARIO = "alimentario"
    LOGISTICA = "logistica"
    OTROS = "otros"


class Sex(str, Enum):
    """Patient sex as the short codes used by the intake forms."""

    MALE = "M"
    FEMALE = "F"
    OTHER = "Otro"


class MaritalStatus(str, Enum):
    SINGLE = "Soltero/a"
    MARRIED = "Casado/a"
    DIVORCED = "Divorciado/a"
    WIDOWED = "Viudo/a"
    CIVIL_UNION = "Unión Civil"


class FitnessMark(str, Enum):
    """Per-item fitness checkbox. The empty string means "not assessed"."""

    NORMAL = "N"
    ABNORMAL = "A"
    UNSET = ""


class Preexisting(str, Enum):
    WITH = "con"
    WITHOUT = "sin"
    UNSET = ""


class ExamType(str, Enum):
    INGRESO = "ingreso"  # pre-employment
    PERIODICO = "periodico"
    EGRESO = "egreso"  # exit exam
    CAMBIO_SECTOR = "cambio_sector"


class ScheduledExamStatus(str, Enum):
    """Advisory workflow of a scheduled exam event."""

    DRAFT = "draft"
    OPEN_REGISTRATION = "open_registration"
    CLOSED = "closed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RegistrationStatus(str, Enum):
    """Per-patient status inside a scheduled exam."""

    REGISTERED = "registered"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"  # a clinical record was generated
    NO_SHOW = "no_show"


class PatientAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


class UserStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class AuditCategory(str, Enum):
    ACCESS = "access"
    MODIFICATION = "modification"
    AUTHENTICATION = "authentication"
    ADMINISTRATION = "administration"
    SECURITY = "security"


class AuditAction(str, Enum):
    """Auditable actions, grouped by :class:`AuditCategory`."""

    # Access
    VIEW = "VIEW"
    SEARCH = "SEARCH"
    EXPORT = "EXPORT"
    PRINT = "PRINT"
    DOWNLOAD = "DOWNLOAD"

    # Modification
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    RESTORE = "RESTORE"

    # Authentication
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    LOGIN_FAILED = "LOGIN_FAILED"
    PASSWORD_CHANGE = "PASSWORD_CHANGE"
    PASSWORD_RESET = "PASSWORD_RESET"

    # Administration
    USER_CREATE = "USER_CREATE"
    USER_DEACTIVATE = "USER_DEACTIVATE"
    ROLE_ASSIGN = "ROLE_ASSIGN"
    PERMISSION_CHANGE = "PERMISSION_CHANGE"
    SETTINGS_CHANGE = "SETTINGS_CHANGE"

    # Security events
    UNAUTHORIZED_ACCESS = "UNAUTHORIZED_ACCESS"
    SUSPICIOUS_ACTIVITY = "SUSPICIOUS_ACTIVITY"
    DATA_BREACH_ATTEMPT = "DATA_BREACH_ATTEMPT"

    @property
    def category(self) -> AuditCategory:
        return _AUDIT_CATEGORIES[self]


_AUDIT_CATEGORIES = {
    AuditAction.VIEW: AuditCategory.ACCESS,
    AuditAction.SEARCH: AuditCategory.ACCESS,
    AuditAction.EXPORT: AuditCategory.ACCESS,
    AuditAction.PRINT: AuditCategory.ACCESS,
    AuditAction.DOWNLOAD: AuditCategory.ACCESS,
    AuditAction.CREATE: AuditCategory.MODIFICATION,
    AuditAction.UPDATE: AuditCategory.MODIFICATION,
    AuditAction.DELETE: AuditCategory.MODIFICATION,
    AuditAction.RESTORE: AuditCategory.MODIFICATION,
    AuditAction.LOGIN: AuditCategory.AUTHENTICATION,
    AuditAction.LOGOUT: AuditCategory.AUTHENTICATION,
    AuditAction.LOGIN_FAILED: AuditCategory.AUTHENTICATION,
    AuditAction.PASSWORD_CHANGE: AuditCategory.AUTHENTICATION,
    AuditAction.PASSWORD_RESET: AuditCategory.AUTHENTICATION,
    AuditAction.USER_CREATE: AuditCategory.ADMINISTRATION,
    AuditAction.USER_DEACTIVATE: AuditCategory.ADMINISTRATION,
    AuditAction.ROLE_ASSIGN: AuditCategory.ADMINISTRATION,
    AuditAction.PERMISSION_CHANGE: AuditCategory.ADMINISTRATION,
    AuditAction.SETTINGS_CHANGE: AuditCategory.ADMINISTRATION,
    AuditAction.UNAUTHORIZED_ACCESS: AuditCategory.SECURITY,
    AuditAction.SUSPICIOUS_ACTIVITY: AuditCategory.SECURITY,
    AuditAction.DATA_BREACH_ATTEMPT: AuditCategory.SECURITY,
}


class AuditResource(str, Enum):
    PATIENT = "PATIENT"
    CLINICAL_RECORD = "CLINICAL_RECORD"
    COMPANY = "COMPANY"
    SCHEDULED_EXAM = "SCHEDULED_EXAM"
    USER = "USER"
    ROLE = "ROLE"
    TEAM = "TEAM"
    ORGANIZATION = "ORGANIZATION"
    INVITATION = "INVITATION"
    NOTIFICATION = "NOTIFICATION"
    REPORT = "REPORT"
    SYSTEM = "SYSTEM"


class AuditSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"
