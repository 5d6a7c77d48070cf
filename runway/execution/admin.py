from django.contrib import admin
from .models import Workspace, WorkspaceMember, WorkspaceInvite, Milestone, Task, Sprint, LedgerEntry, ValidationEntry

admin.site.register(WorkspaceInvite)


class WorkspaceMemberInline(admin.TabularInline):
    model = WorkspaceMember
    extra = 0


@admin.register(Workspace)
class WorkspaceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "stage", "created_by", "created_at")
    search_fields = ("name", "created_by")
    list_filter = ("stage",)
    inlines = [WorkspaceMemberInline]


@admin.register(Milestone)
class MilestoneAdmin(admin.ModelAdmin):
    list_display = ("title", "workspace", "status", "progress_percentage", "order")
    list_filter = ("status",)
    search_fields = ("title",)


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ("title", "workspace", "milestone", "sprint", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("title", "owner_id")


@admin.register(Sprint)
class SprintAdmin(admin.ModelAdmin):
    list_display = ("id", "workspace", "week_start_date", "week_end_date", "locked", "completed")
    list_filter = ("locked", "completed")
    # lifecycle goes through SprintService only
    readonly_fields = ("locked", "completed", "completion_stats", "task_ids")


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "workspace", "sprint_id", "entry_type", "hash")
    list_filter = ("entry_type",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ValidationEntry)
class ValidationEntryAdmin(admin.ModelAdmin):
    list_display = ("validation_type", "workspace", "origin", "source_type", "created_at")
    list_filter = ("validation_type", "origin")
    search_fields = ("summary", "feedback_text")
