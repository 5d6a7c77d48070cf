# ============================================
# execution/models/__init__.py
# ============================================
from .choices import FundingCategory
from .workspace import Workspace, WorkspaceMember, WorkspaceInvite
from .milestone import Milestone
from .task import Task
from .sprint import Sprint
from .ledger import LedgerEntry
from .validation import ValidationEntry

__all__ = [
    'FundingCategory',
    'Workspace',
    'WorkspaceMember',
    'WorkspaceInvite',
    'Milestone',
    'Task',
    'Sprint',
    'LedgerEntry',
    'ValidationEntry',
]
