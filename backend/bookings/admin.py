from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("property", "renter", "agency", "from_date", "to_date", "status", "price", "expire_at")
    list_filter = ("status", "cancellation")
    search_fields = ("property__name", "renter__email", "agency__email", "session_id")
    readonly_fields = ("session_id", "payment_intent_id", "customer_id")
