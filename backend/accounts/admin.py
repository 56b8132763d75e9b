from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class RentbayUserAdmin(UserAdmin):
    list_display = ("email", "display_name", "type", "language", "is_active")
    list_filter = ("type", "is_active", "is_staff")
    fieldsets = UserAdmin.fieldsets + (
        ("Rentbay", {"fields": ("type", "language", "display_name")}),
    )
