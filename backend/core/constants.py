"""Constants and enums for the Automation Atlas analytics engine."""

from enum import Enum


class Department(str, Enum):
    """Business department owning a flow."""

    SALES = "sales"
    MARKETING = "marketing"
    SUPPORT = "support"
    OPERATIONS = "operations"
    FINANCE = "finance"


class TriggerType(str, Enum):
    """How a flow is started on its source platform."""

    WEBHOOK = "webhook"
    SCHEDULE = "schedule"
    MANUAL = "manual"
    EVENT = "event"


class FlowStatus(str, Enum):
    """Flow status as reported by the source platform."""

    ACTIVE = "active"
    DISABLED = "disabled"
    ERROR = "error"


class Frequency(str, Enum):
    """How often a flow runs."""

    REALTIME = "realtime"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Tool(str, Enum):
    """Platforms flows are synced from."""

    ZAPIER = "zapier"
    HUBSPOT = "hubspot"
    LEMLIST = "lemlist"
    MAKE = "make"
    SALESFORCE = "salesforce"


class BusinessValue(str, Enum):
    """Owner-assigned business value of a flow."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Level(str, Enum):
    """Severity of an orphan finding or impact of an anomaly."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExecutionLogStatus(str, Enum):
    """Outcome of a single flow execution."""

    SUCCESS = "success"
    FAILURE = "failure"
    WARNING = "warning"
