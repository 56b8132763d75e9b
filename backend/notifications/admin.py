from django.contrib import admin

from .models import Notification, NotificationCounter


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("user", "message", "booking", "is_read", "created_at")
    list_filter = ("is_read",)
    search_fields = ("user__email", "message")


@admin.register(NotificationCounter)
class NotificationCounterAdmin(admin.ModelAdmin):
    list_display = ("user", "count", "updated_at")
    search_fields = ("user__email",)
    readonly_fields = ("count",)
