from rest_framework import serializers

from bookings.models import Booking
from properties.models import Property


class BookingSerializer(serializers.ModelSerializer):
    property_name = serializers.CharField(source="property.name", read_only=True)
    location_name = serializers.CharField(source="location.name", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "agency",
            "property",
            "property_name",
            "location",
            "location_name",
            "from_date",
            "to_date",
            "status",
            "expire_at",
            "cancellation",
            "price",
            "created_at",
        ]
        read_only_fields = fields


class BookingCheckoutSerializer(serializers.Serializer):
    property = serializers.PrimaryKeyRelatedField(
        queryset=Property.objects.filter(available=True).select_related("agency", "location"),
    )
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    cancellation = serializers.BooleanField(required=False, default=False)

    def get_fields(self):
        fields = super().get_fields()
        fields["from"] = serializers.DateTimeField(source="from_date")
        fields["to"] = serializers.DateTimeField(source="to_date")
        fields["sessionId"] = serializers.CharField(source="session_id", required=False, allow_blank=True)
        fields["paymentIntentId"] = serializers.CharField(
            source="payment_intent_id", required=False, allow_blank=True
        )
        fields["customerId"] = serializers.CharField(source="customer_id", required=False, allow_blank=True)
        fields["payLater"] = serializers.BooleanField(source="pay_later", required=False, default=False)
        return fields

    def validate(self, attrs):
        if attrs["to_date"] <= attrs["from_date"]:
            raise serializers.ValidationError({"to": "Must be after the start date."})

        modes = [
            bool(attrs.get("session_id")),
            bool(attrs.get("payment_intent_id")),
            attrs.get("pay_later", False),
        ]
        if sum(modes) != 1:
            raise serializers.ValidationError(
                "Provide exactly one of sessionId, paymentIntentId or payLater."
            )
        session_id = attrs.get("session_id")
        if session_id and Booking.objects.filter(session_id=session_id).exists():
            raise serializers.ValidationError({"sessionId": "A booking already uses this session."})
        payment_intent_id = attrs.get("payment_intent_id")
        if payment_intent_id and Booking.objects.filter(payment_intent_id=payment_intent_id).exists():
            raise serializers.ValidationError(
                {"paymentIntentId": "A booking already uses this payment intent."}
            )

        attrs.pop("pay_later", None)
        return attrs
