from __future__ import annotations

from django.conf import settings
from django.core.mail import send_mail

from bookings.models import Booking


def send_booking_paid_email(booking: Booking):
    renter = booking.renter
    if not renter.email:
        return

    # Sent on the agency's behalf from the platform's own address.
    _, _, address = settings.DEFAULT_FROM_EMAIL.rpartition("<")
    from_email = f"{booking.agency.get_display_name()} via Rentbay <{address.rstrip('>')}>"
    subject = f"{booking.property.name} booking confirmed"
    body_lines = [
        f"Hi {renter.get_display_name()},",
        "",
        f"Your payment for {booking.property.name} ({booking.location.name}) was received.",
        f"Stay: {booking.from_date:%B %d, %Y} to {booking.to_date:%B %d, %Y}.",
        f"Total paid: {booking.price}.",
        f"Booking reference: #{booking.pk}",
        "",
        f"View your booking: {settings.FRONTEND_URL.rstrip('/')}/bookings/{booking.pk}",
        "",
        "The Rentbay Team",
    ]
    send_mail(subject, "\n".join(body_lines), from_email, [renter.email], fail_silently=False)
