from django.contrib import admin
from .models import FundingRound, FundingAllocation, SpendLog, ExecutionAuditLog

admin.site.register(FundingAllocation)


@admin.register(FundingRound)
class FundingRoundAdmin(admin.ModelAdmin):
    list_display = ("name", "workspace", "amount", "currency", "source", "date")
    list_filter = ("source", "currency")


@admin.register(SpendLog)
class SpendLogAdmin(admin.ModelAdmin):
    list_display = ("workspace", "category", "amount", "date", "linked_sprint", "linked_milestone")
    list_filter = ("category",)


@admin.register(ExecutionAuditLog)
class ExecutionAuditLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "workspace", "event_type", "entity_id", "summary")
    list_filter = ("event_type",)

    def has_change_permission(self, request, obj=None):
        return False
