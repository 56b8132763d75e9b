from django.contrib import admin
from django.urls import path, re_path
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.api import LoginView, MeView
from bookings.api import BookingCheckoutView, BookingListView
from notifications.api import (
    MarkAsReadView,
    MarkAsUnreadView,
    NotificationCounterView,
    NotificationListView,
)
from payments.api import (
    CheckCheckoutSessionView,
    CreateCheckoutSessionView,
    CreatePaymentIntentView,
)

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/login/", LoginView.as_view(), name="auth-login"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="auth-refresh"),
    path("api/auth/me/", MeView.as_view(), name="auth-me"),
    re_path(
        r"^api/create-checkout-session/?$",
        CreateCheckoutSessionView.as_view(),
        name="create-checkout-session",
    ),
    re_path(
        r"^api/check-checkout-session/(?P<session_id>[^/]+)/?$",
        CheckCheckoutSessionView.as_view(),
        name="check-checkout-session",
    ),
    re_path(
        r"^api/create-payment-intent/?$",
        CreatePaymentIntentView.as_view(),
        name="create-payment-intent",
    ),
    path("api/checkout/", BookingCheckoutView.as_view(), name="booking-checkout"),
    path("api/bookings/", BookingListView.as_view(), name="booking-list"),
    path(
        "api/notification-counter/<int:user_id>/",
        NotificationCounterView.as_view(),
        name="notification-counter",
    ),
    path("api/notifications/", NotificationListView.as_view(), name="notification-list"),
    path(
        "api/notifications/mark-as-read/",
        MarkAsReadView.as_view(),
        name="notification-mark-read",
    ),
    path(
        "api/notifications/mark-as-unread/",
        MarkAsUnreadView.as_view(),
        name="notification-mark-unread",
    ),
]
