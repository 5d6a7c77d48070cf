# ============================================
# execution/models/choices.py
# ============================================
from django.db import models


class FundingCategory(models.TextChoices):
    """Spend bucket shared by milestones, sprints, allocations and spend logs."""
    ENGINEERING = 'Engineering', 'Engineering'
    MARKETING = 'Marketing', 'Marketing'
    HIRING = 'Hiring', 'Hiring'
    INFRA = 'Infra', 'Infra'
    OPS = 'Ops', 'Ops'
    CUSTOM = 'Custom', 'Custom'
