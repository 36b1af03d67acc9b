from __future__ import annotations

from django.contrib import admin

from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "city", "updated_at")
    search_fields = ("name", "email", "phone", "city")
    readonly_fields = ("created_at", "updated_at")
