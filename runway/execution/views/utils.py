# views/utils.py
"""
Shared tooling for the execution API views.

drf-spectacular helpers:
    from .utils import (
        extend_schema, OpenApiResponse, inline_serializer,
        path_int, q_int, q_str, q_bool, responses_ok, std_errors,
    )

Lookup helpers raise NotFoundError so views stay linear.
"""
from drf_spectacular.utils import (
    extend_schema, OpenApiParameter, OpenApiResponse, inline_serializer,
)
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers

from execution.exceptions import NotFoundError
from execution.models import Workspace
from execution.selectors.workspace import WorkspaceSelector

__all__ = [
    'extend_schema', 'OpenApiResponse', 'OpenApiTypes', 'inline_serializer',
    'ErrorSerializer', 'path_int', 'q_int', 'q_str', 'q_bool',
    'responses_ok', 'std_errors', 'unavailable', 'get_workspace_or_404', 'user_id_of', 'query_int',
]

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="Error",
    fields={"detail": serializers.CharField()}
)

# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description)

def q_bool(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=False, description=description)

# ---- Convenience for common responses

def responses_ok(serializer_cls, many: bool = False, description: str | None = None, extra: dict | None = None):
    """Build a {200: ...} response mapping quickly."""
    serializer = serializer_cls(many=many) if isinstance(serializer_cls, type) else serializer_cls
    mapping = {200: OpenApiResponse(response=serializer, description=description or "OK")}
    if extra:
        mapping.update(extra)
    return mapping


def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs

# ---- Lookups

def get_workspace_or_404(workspace_id: int) -> Workspace:
    workspace = WorkspaceSelector.get_workspace_by_id(workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")
    return workspace


def user_id_of(request) -> str:
    return str(request.user.id)


def query_int(request, name: str):
    """Integer query param or None; junk values are ignored"""
    value = request.query_params.get(name)
    return int(value) if value and value.isdigit() else None


def unavailable():
    """503 mapping for operations that write through a transaction"""
    return {503: OpenApiResponse(ErrorSerializer, description="Service Unavailable")}
