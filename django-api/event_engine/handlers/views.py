"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import exceptions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from event_engine.conf import engine_setting
from event_engine.domain.errors import (
    DomainError,
    ErrorCode,
    InvalidTransitionError,
    NotFoundError,
    ResourceConflictError,
    TransactionFailureError,
    ValidationError,
)
from event_engine.handlers.serializers import (
    EventOperationRequestSerializer,
    EventSerializer,
    MissionRequestSerializer,
    MissionSerializer,
    ResourceAssignmentRequestSerializer,
    ResourceAssignmentSerializer,
)
from event_engine.services.event_operations import EventOperationService
from event_engine.services.mission_service import MissionService
from event_engine.stores.django_store import DjangoEventStore

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (ResourceConflictError, status.HTTP_409_CONFLICT),
    (TransactionFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def get_operation_service() -> EventOperationService:
    return EventOperationService(
        DjangoEventStore(),
        max_attempts=engine_setting("TRANSACTION_MAX_ATTEMPTS"),
        retry_backoff=engine_setting("TRANSACTION_RETRY_BACKOFF"),
        clone_title_suffix=engine_setting("CLONE_TITLE_SUFFIX"),
    )


def get_mission_service() -> MissionService:
    return MissionService(
        DjangoEventStore(),
        max_attempts=engine_setting("TRANSACTION_MAX_ATTEMPTS"),
        retry_backoff=engine_setting("TRANSACTION_RETRY_BACKOFF"),
    )


def error_response(exc: DomainError) -> Response:
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, mapped in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            http_status = mapped
            break

    body = {"error": {"code": exc.code.value, "message": exc.message}}
    if isinstance(exc, ResourceConflictError):
        body["conflicts"] = [conflict.as_report() for conflict in exc.conflicts]
    return Response(body, status=http_status)


class DomainErrorMixin:
    """Render domain errors raised by a handler as JSON error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        if isinstance(exc, exceptions.ValidationError):
            body = {
                "error": {
                    "code": ErrorCode.VALIDATION_ERROR.value,
                    "message": "Invalid request body",
                },
                "fields": exc.detail,
            }
            return Response(body, status=status.HTTP_400_BAD_REQUEST)
        return super().handle_exception(exc)


class EventDetailView(DomainErrorMixin, APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = get_operation_service().get_event_subtree(event_id)
        return Response(EventSerializer(event).data)


class EventOperationView(DomainErrorMixin, APIView):
    """Handler for POST and DELETE /api/event-operations/{event_id}"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = EventOperationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = get_operation_service().apply_operation(
            event_id,
            serializer.validated_data["operation"],
            starts_at=serializer.validated_data["starts_at"],
        )
        body = {"message": result.message}
        if result.event is not None:
            body["event"] = EventSerializer(result.event).data
        http_status = status.HTTP_201_CREATED if result.operation == "clone" else status.HTTP_200_OK
        return Response(body, status=http_status)

    def delete(self, request: Request, event_id: str) -> Response:
        result = get_operation_service().apply_operation(event_id, "delete")
        return Response({"message": result.message, **result.extra})


class ResourceAssignmentView(DomainErrorMixin, APIView):
    """Handler for POST /api/resource-assignments"""

    def post(self, request: Request) -> Response:
        serializer = ResourceAssignmentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        assignment = get_operation_service().assign_resource(
            data["owner_id"],
            data["resource_kind"],
            data["resource_id"],
            window=serializer.window,
            notes=data["notes"],
        )
        return Response(
            ResourceAssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED
        )


class ResourceReleaseView(DomainErrorMixin, APIView):
    """Handler for POST /api/resource-assignments/{assignment_id}/release"""

    def post(self, request: Request, assignment_id: str) -> Response:
        assignment = get_operation_service().release_resource(assignment_id)
        return Response(ResourceAssignmentSerializer(assignment).data)


class EventFareView(DomainErrorMixin, APIView):
    """Handler for POST /api/events/{event_id}/fare"""

    def post(self, request: Request, event_id: str) -> Response:
        total = get_operation_service().recompute_fare(event_id)
        return Response({"total_fare": str(total) if total is not None else None})


class MissionListView(DomainErrorMixin, APIView):
    """Handler for POST /api/events/{event_id}/missions"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = MissionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        mission = get_mission_service().create_mission(event_id, serializer.to_draft())
        return Response(MissionSerializer(mission).data, status=status.HTTP_201_CREATED)


class MissionDetailView(DomainErrorMixin, APIView):
    """Handler for PATCH and DELETE /api/events/{event_id}/missions/{mission_id}"""

    def patch(self, request: Request, event_id: str, mission_id: str) -> Response:
        serializer = MissionRequestSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        mission = get_mission_service().update_mission(
            event_id, mission_id, **serializer.to_changes()
        )
        return Response(MissionSerializer(mission).data)

    def delete(self, request: Request, event_id: str, mission_id: str) -> Response:
        detached = get_mission_service().delete_mission(event_id, mission_id)
        return Response({"message": "Mission deleted successfully", "detached_rides": detached})
