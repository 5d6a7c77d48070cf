from django.apps import AppConfig


class ExecutionConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'execution'
    verbose_name = 'Execution (Workspaces • Sprints • Ledger)'
