from .integration import WorkspaceIntegration, SlackSetup, DeliveryLog

__all__ = [
    'WorkspaceIntegration',
    'SlackSetup',
    'DeliveryLog',
]
