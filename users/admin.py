from django.contrib import admin

from .models import Session, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "name", "latitude", "longitude")
    search_fields = ("email", "name")
    exclude = ("password",)


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    list_display = ("user", "created_at")
    search_fields = ("user__email",)
