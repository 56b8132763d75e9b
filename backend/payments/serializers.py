from decimal import Decimal

from rest_framework import serializers

from payments.services.checkout import PaymentRequest


class PaymentRequestSerializer(serializers.Serializer):
    """Validate the camelCase payment payload sent by the checkout front end."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    currency = serializers.RegexField(r"^[A-Za-z]{3}$")
    locale = serializers.CharField(required=False, allow_blank=True, default="")
    name = serializers.CharField(max_length=250)
    description = serializers.CharField(required=False, allow_blank=True, default="")

    def get_fields(self):
        fields = super().get_fields()
        fields["receiptEmail"] = serializers.EmailField(source="receipt_email")
        fields["customerName"] = serializers.CharField(source="customer_name", max_length=250)
        return fields

    def create(self, validated_data) -> PaymentRequest:
        return PaymentRequest(**validated_data)
