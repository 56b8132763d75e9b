from django.contrib import admin

from .models import Location, Property


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    search_fields = ("name",)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "agency", "location", "price", "available")
    list_filter = ("available", "location")
    search_fields = ("name", "agency__email")
