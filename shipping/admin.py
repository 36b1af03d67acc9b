from __future__ import annotations

from django import forms
from django.contrib import admin
from django.core.exceptions import ValidationError

from .models import DeliveryRule
from .services import DeliveryRuleError, tier_from_values, validate_delivery_rules


@admin.register(DeliveryRule)
class DeliveryRuleAdmin(admin.ModelAdmin):
    list_display = ("delivery_mode", "min_weight", "max_weight", "price", "sort_order", "updated_at")
    list_filter = ("delivery_mode",)
    ordering = ("delivery_mode", "min_weight")
    readonly_fields = ("created_at", "updated_at")

    class Form(forms.ModelForm):
        class Meta:
            model = DeliveryRule
            fields = "__all__"

        def clean(self):
            cleaned = super().clean()
            mode = cleaned.get("delivery_mode")
            min_w = cleaned.get("min_weight")
            max_w = cleaned.get("max_weight")
            price = cleaned.get("price")
            if mode is None or min_w is None or max_w is None or price is None:
                return cleaned

            others = DeliveryRule.objects.filter(delivery_mode=mode)
            if self.instance.pk:
                others = others.exclude(pk=self.instance.pk)

            candidate = tier_from_values(delivery_mode=mode, min_weight=min_w, max_weight=max_w, price=price)
            try:
                validate_delivery_rules([*others, candidate])
            except DeliveryRuleError as exc:
                raise ValidationError(str(exc))
            return cleaned

    form = Form
