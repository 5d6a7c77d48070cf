# ============================================
# funding/models/__init__.py
# ============================================
from .funding import FundingRound, FundingAllocation, SpendLog
from .audit import ExecutionAuditLog

__all__ = [
    'FundingRound',
    'FundingAllocation',
    'SpendLog',
    'ExecutionAuditLog',
]
