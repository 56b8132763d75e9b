import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking
from bookings.serializers import BookingCheckoutSerializer, BookingSerializer
from bookings.services.checkout import create_booking
from payments.exceptions import PaymentError
from payments.services.stripe_client import configure_stripe

logger = logging.getLogger(__name__)


class BookingListView(generics.ListAPIView):
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status"]
    ordering_fields = ["created_at", "from_date"]

    def get_queryset(self):
        return Booking.objects.filter(renter=self.request.user).select_related("property", "location")


class BookingCheckoutView(APIView):
    """Create the booking for a renter who has started or finished paying."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = BookingCheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data.get("payment_intent_id"):
            try:
                configure_stripe()
            except RuntimeError as exc:
                return Response(
                    {"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR
                )

        try:
            booking = create_booking(renter=request.user, **data)
        except PaymentError as exc:
            logger.warning("Checkout rejected for user %s: %s", request.user.pk, exc)
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"bookingId": booking.pk})
