from .member import Member  # noqa: F401
from .dues import DuesConfig, DuesPayment  # noqa: F401
from .campaign import Campaign, Contribution  # noqa: F401
from .expense import Expense  # noqa: F401
from .month_closure import MonthClosure  # noqa: F401
from .audit_log import AuditEntry  # noqa: F401
