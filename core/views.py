"""REST views for the calendar notification service."""

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants.notifications import (
    NOTIFICATION_URL,
    TEST_NOTIFICATION_BODY,
    TEST_NOTIFICATION_TAG,
    TEST_NOTIFICATION_TITLE,
)
from core.constants.tides import DEFAULT_TIDE_DAYS, MAX_TIDE_DAYS
from core.repositories import PreferenceRepository, SubscriptionRepository
from core.schemas.notification import (
    NotificationPayload,
    NotificationPreferencesData,
    NotificationPreferencesUpdate,
)
from core.schemas.push import (
    PushSubscriptionRequest,
    SubscriptionDetail,
    SubscriptionStatusResponse,
    UnsubscribeRequest,
)
from core.services import health_service
from core.services.push_notification_service import push_notification_service
from core.services.tide_service import tide_service

logger = structlog.get_logger(__name__)

DEFAULT_TIDE_LOCATION = "Lisboa"


def _bad_request(error: ValidationError, message: str) -> Response:
    """Return the 400 body used for request validation failures."""
    return Response(
        {
            "error": "bad_request",
            "message": message,
            "errors": error.errors(include_url=False, include_context=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class PublicAPIView(APIView):
    """Base view for endpoints that need no authentication."""

    authentication_classes: list = []
    permission_classes = (AllowAny,)


class LivenessCheckView(PublicAPIView):
    """Liveness probe: 200 while the process is up, no dependency checks."""

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(PublicAPIView):
    """Readiness probe.

    Always 200: an unavailable database, Redis or push configuration is
    reported as ``degraded`` so the API keeps serving what it can.
    """

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


class VapidPublicKeyView(PublicAPIView):
    """Expose the VAPID public key browsers need to subscribe."""

    def get(self, _request):
        """Return ``{"publicKey": ...}``.

        Raises:
            PushNotConfiguredError: When push is not configured (503)
        """
        push_notification_service.require_enabled()
        return Response({"publicKey": push_notification_service.public_key})


class PushSubscribeView(APIView):
    """Register (or refresh) a push subscription for the current user."""

    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Upsert the subscription keyed by its endpoint.

        Returns:
            200 on success, 400 if the subscription is malformed
        """
        try:
            subscription_request = PushSubscriptionRequest.model_validate(request.data)
        except ValidationError as e:
            logger.warning("invalid_push_subscription", errors=e.error_count())
            return _bad_request(e, "Invalid push subscription")

        subscription = SubscriptionRepository.upsert(
            request.user.user_id, subscription_request
        )
        logger.info(
            "push_subscription_registered",
            user_id=request.user.user_id,
            subscription_id=subscription.id,
        )
        return Response(
            {"success": True, "message": "Subscription registered successfully"}
        )


class PushSubscriptionStatusView(APIView):
    """Report whether the current user has a registered device."""

    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Return ``{"isSubscribed": bool, "subscription": {...} | null}``."""
        subscription = SubscriptionRepository.get_first_for_user(request.user.user_id)
        response = SubscriptionStatusResponse(
            is_subscribed=subscription is not None,
            subscription=(
                SubscriptionDetail.model_validate(subscription)
                if subscription is not None
                else None
            ),
        )
        return Response(response.model_dump(by_alias=True, mode="json"))


class PushUnsubscribeView(APIView):
    """Remove a push subscription by endpoint."""

    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Delete the subscription if it exists; repeat calls are harmless."""
        try:
            unsubscribe_request = UnsubscribeRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "Endpoint is required")

        deleted = SubscriptionRepository.delete_subscription(
            unsubscribe_request.endpoint
        )
        logger.info(
            "push_unsubscribed",
            user_id=request.user.user_id,
            deleted=deleted,
        )
        return Response({"success": True, "message": "Unsubscribed successfully"})


class PushTestView(APIView):
    """Send a test notification to all devices of the current user."""

    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Send the test notification.

        Raises:
            PushNotConfiguredError: When push is not configured (503)
        """
        payload = NotificationPayload(
            title=TEST_NOTIFICATION_TITLE,
            body=TEST_NOTIFICATION_BODY,
            url=NOTIFICATION_URL,
            tag=TEST_NOTIFICATION_TAG,
        )
        report = push_notification_service.send_to_user(request.user.user_id, payload)
        return Response(
            {
                "success": True,
                "message": "Test notification sent",
                "delivered": report.delivered,
            }
        )


class NotificationPreferencesView(APIView):
    """Read and update the current user's notification preferences."""

    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Return stored preferences, or the defaults when none are stored."""
        row = PreferenceRepository.get_for_user(request.user.user_id)
        preferences = (
            NotificationPreferencesData.model_validate(row)
            if row is not None
            else NotificationPreferencesData()
        )
        return Response(preferences.model_dump(by_alias=True))

    def put(self, request):
        """Upsert the fields present in the body.

        Returns:
            200 with the resulting preferences, 400 on invalid times or
            frequency values
        """
        try:
            update = NotificationPreferencesUpdate.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "invalid_notification_preferences",
                user_id=request.user.user_id,
                errors=e.error_count(),
            )
            return _bad_request(e, "Invalid notification preferences")

        row = PreferenceRepository.upsert_for_user(request.user.user_id, update)
        logger.info(
            "notification_preferences_updated",
            user_id=request.user.user_id,
            fields=sorted(update.changed_fields()),
        )
        return Response(
            {
                "success": True,
                "message": "Preferences updated successfully",
                "preferences": NotificationPreferencesData.model_validate(
                    row
                ).model_dump(by_alias=True),
            }
        )


class TideLocationsView(PublicAPIView):
    """List the supported coastal tide locations."""

    def get(self, _request):
        """Return the locations with coordinates and region."""
        return Response(
            [location.model_dump() for location in tide_service.get_locations()]
        )


class TidePredictionsView(PublicAPIView):
    """High and low water predictions for the coming days."""

    def get(self, request):
        """Return predictions for ``location``, ``lat``/``lon`` or Lisboa.

        ``days`` defaults to 7 and must be between 1 and 30.

        Raises:
            TideLocationNotFoundError: Unknown location name (404)
            DownstreamServiceError: Tide provider failure (502)
        """
        try:
            days = int(request.query_params.get("days", DEFAULT_TIDE_DAYS))
        except ValueError:
            days = 0
        if not 1 <= days <= MAX_TIDE_DAYS:
            return Response(
                {"error": "bad_request", "message": "Invalid days"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        location = request.query_params.get("location")
        lat = request.query_params.get("lat")
        lon = request.query_params.get("lon")

        if location:
            tide_data = tide_service.get_tides_by_location(location, days)
        elif lat is not None and lon is not None:
            try:
                coordinates = (float(lat), float(lon))
            except ValueError:
                return Response(
                    {"error": "bad_request", "message": "Invalid coordinates"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            tide_data = tide_service.get_tide_predictions(*coordinates, days)
        else:
            tide_data = tide_service.get_tides_by_location(DEFAULT_TIDE_LOCATION, days)

        return Response(tide_data.model_dump(by_alias=True, mode="json"))


class NextTidesView(PublicAPIView):

    """Next high and low water for a location."""

    def get(self, request):
        """Resolve ``location`` (or ``lat``/``lon``) and return the next tides.

        Defaults to Lisboa when no location is given.

        Raises:
            TideLocationNotFoundError: Unknown location name (404)
            DownstreamServiceError: Tide provider failure (502)
        """
        lat = request.query_params.get("lat")
        lon = request.query_params.get("lon")

        if lat is not None and lon is not None:
            try:
                coordinates = (float(lat), float(lon))
            except ValueError:
                return Response(
                    {"error": "bad_request", "message": "Invalid coordinates"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
        else:
            location = tide_service.find_location(
                request.query_params.get("location") or DEFAULT_TIDE_LOCATION
            )
            coordinates = (location.lat, location.lon)

        next_tides = tide_service.get_next_tides(*coordinates)
        return Response(next_tides.model_dump(by_alias=True, mode="json"))
