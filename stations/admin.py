from django.contrib import admin

from .models import WashingStation


@admin.register(WashingStation)
class WashingStationAdmin(admin.ModelAdmin):
    list_display = ("name", "address", "status", "place_id")
    list_filter = ("status",)
    search_fields = ("name", "address", "place_id")
