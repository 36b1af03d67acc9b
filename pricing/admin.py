from __future__ import annotations

from django.contrib import admin

from .models import VatSettings


@admin.register(VatSettings)
class VatSettingsAdmin(admin.ModelAdmin):
    list_display = ("code", "enabled", "rate", "updated_at")
    readonly_fields = ("created_at", "updated_at")
