import builtins

from django.conf import settings
from django.db import models
from django.utils import timezone


class Booking(models.Model):
    """Reservation of a property by a renter, optionally tied to a Stripe payment."""

    VOID = "VOID"
    PENDING = "PENDING"
    DEPOSIT = "DEPOSIT"
    PAID = "PAID"
    RESERVED = "RESERVED"
    CANCELLED = "CANCELLED"
    STATUSES = [
        (VOID, "Void"),
        (PENDING, "Pending"),
        (DEPOSIT, "Deposit"),
        (PAID, "Paid"),
        (RESERVED, "Reserved"),
        (CANCELLED, "Cancelled"),
    ]

    agency = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="agency_bookings",
    )
    property = models.ForeignKey("properties.Property", on_delete=models.CASCADE, related_name="bookings")
    renter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    location = models.ForeignKey("properties.Location", on_delete=models.PROTECT, related_name="bookings")
    from_date = models.DateTimeField()
    to_date = models.DateTimeField()
    status = models.CharField(max_length=10, choices=STATUSES, default=PENDING)
    # Unpaid bookings are purged by the scheduler once this passes.
    expire_at = models.DateTimeField(null=True, blank=True, db_index=True)
    session_id = models.CharField(max_length=255, null=True, blank=True, unique=True)
    payment_intent_id = models.CharField(max_length=255, null=True, blank=True, unique=True)
    customer_id = models.CharField(max_length=255, blank=True)
    cancellation = models.BooleanField(default=False)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.property} booking ({self.get_status_display()})"

    # The "property" field shadows the builtin inside the class body.
    @builtins.property
    def is_paid(self) -> bool:
        return self.status == self.PAID

    @builtins.property
    def is_expired(self) -> bool:
        return self.expire_at is not None and timezone.now() > self.expire_at

    def mark_paid(self, using=None):
        self.status = self.PAID
        self.expire_at = None
        self.save(using=using, update_fields=["status", "expire_at", "updated_at"])
