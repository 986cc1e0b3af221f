"""Admin registration for billboards and their booking requests.

The admin is where owners approve or reject requests; the booking core
only reads the statuses it leaves behind.
"""

from __future__ import annotations

from django.contrib import admin, messages

from .models import Billboard, BillboardBooking, BillboardRequest, ReservationRow


@admin.register(Billboard)
class BillboardAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "location",
        "region",
        "price_per_day",
        "available_from",
        "available_to",
        "created_at",
    )
    list_filter = ("region",)
    search_fields = ("name", "location", "owner_name")
    readonly_fields = ("created_at",)


class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "brand_name",
        "billboard",
        "status",
        "start_date",
        "end_date",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("brand_name", "billboard__name")
    readonly_fields = ("created_at",)
    actions = ("approve", "reject")

    @admin.action(description="Approve selected requests")
    def approve(self, request, queryset):  # type: ignore
        updated = queryset.filter(status=ReservationRow.Status.PENDING).update(
            status=ReservationRow.Status.APPROVED,
        )
        self.message_user(request, f"Approved {updated} request(s).", messages.SUCCESS)

    @admin.action(description="Reject selected requests")
    def reject(self, request, queryset):  # type: ignore
        updated = queryset.filter(status=ReservationRow.Status.PENDING).update(
            status=ReservationRow.Status.REJECTED,
            rejection_reason="Rejected by administrator",
        )
        self.message_user(request, f"Rejected {updated} request(s).", messages.WARNING)


admin.site.register(BillboardRequest, ReservationAdmin)
admin.site.register(BillboardBooking, ReservationAdmin)
