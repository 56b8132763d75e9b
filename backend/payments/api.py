import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.exceptions import PaymentError
from payments.serializers import PaymentRequestSerializer
from payments.services.checkout import (
    CheckoutState,
    check_checkout_session,
    create_checkout_session,
    create_payment_intent,
)
from payments.services.stripe_client import configure_stripe

logger = logging.getLogger(__name__)


class StripeView(APIView):
    """Public Stripe endpoints; failures answer 400 with an empty body."""

    permission_classes: list = []
    authentication_classes: list = []

    def configure(self):
        try:
            configure_stripe()
        except RuntimeError as exc:
            logger.error("Stripe secret not configured: %s", exc)
            return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return None


class PaymentCreateView(StripeView):
    def post(self, request, *args, **kwargs):
        serializer = PaymentRequestSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Rejected payment payload: %s", serializer.errors)
            return Response(status=status.HTTP_400_BAD_REQUEST)

        error_response = self.configure()
        if error_response is not None:
            return error_response

        try:
            result = self.perform(serializer.save())
        except PaymentError as exc:
            logger.warning("%s failed: %s", self.__class__.__name__, exc)
            return Response(status=status.HTTP_400_BAD_REQUEST)
        return Response(self.to_payload(result))

    def perform(self, payment):
        raise NotImplementedError

    def to_payload(self, result) -> dict:
        raise NotImplementedError


class CreateCheckoutSessionView(PaymentCreateView):
    def perform(self, payment):
        return create_checkout_session(payment)

    def to_payload(self, result) -> dict:
        return {
            "sessionId": result.session_id,
            "customerId": result.customer_id,
            "clientSecret": result.client_secret,
        }


class CreatePaymentIntentView(PaymentCreateView):
    def perform(self, payment):
        return create_payment_intent(payment)

    def to_payload(self, result) -> dict:
        return {
            "paymentIntentId": result.payment_intent_id,
            "customerId": result.customer_id,
            "clientSecret": result.client_secret,
        }


class CheckCheckoutSessionView(StripeView):
    """Confirm the booking behind a checkout session once Stripe reports it paid."""

    def post(self, request, session_id, *args, **kwargs):
        error_response = self.configure()
        if error_response is not None:
            return error_response

        try:
            check = check_checkout_session(session_id)
        except PaymentError as exc:
            logger.warning("Checking checkout session %s failed: %s", session_id, exc)
            return Response(status=status.HTTP_400_BAD_REQUEST)

        if check.state is CheckoutState.NOT_FOUND:
            return Response(status=status.HTTP_204_NO_CONTENT)
        if check.state is CheckoutState.UNPAID:
            return Response(status=status.HTTP_400_BAD_REQUEST)
        return Response({"bookingId": check.booking.pk, "status": check.booking.status})
