import uuid

import django.db.models.deletion
from django.db import migrations, models


STATUS_CHOICES = [
    ("pending", "Pending"),
    ("approved", "Approved"),
    ("confirmed", "Confirmed"),
    ("rejected", "Rejected"),
    ("cancelled", "Cancelled"),
    ("refunded", "Refunded"),
]


def reservation_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("profile_id", models.UUIDField(blank=True, db_index=True, null=True)),
        ("brand_name", models.CharField(max_length=255)),
        ("start_date", models.DateField()),
        ("end_date", models.DateField()),
        ("message", models.TextField(blank=True, default="")),
        ("budget", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
        ("rejection_reason", models.CharField(blank=True, default="", max_length=255)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Billboard",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("region", models.CharField(blank=True, db_index=True, max_length=100)),
                ("size", models.CharField(blank=True, max_length=50)),
                ("price_per_day", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("description", models.TextField(blank=True)),
                ("availability_notes", models.TextField(blank=True)),
                ("owner_id", models.UUIDField(blank=True, null=True)),
                ("owner_name", models.CharField(blank=True, max_length=255)),
                ("impressions", models.PositiveIntegerField(blank=True, null=True)),
                ("rating", models.DecimalField(blank=True, decimal_places=2, max_digits=3, null=True)),
                (
                    "available_from",
                    models.DateField(
                        blank=True,
                        help_text="Declared start of availability; overrides booking-derived status.",
                        null=True,
                    ),
                ),
                (
                    "available_to",
                    models.DateField(
                        blank=True,
                        help_text="Declared end of availability; overrides booking-derived status.",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Billboard",
                "verbose_name_plural": "Billboards",
                "db_table": "billboards",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="BillboardRequest",
            fields=reservation_fields() + [
                (
                    "status",
                    models.CharField(choices=STATUS_CHOICES, default="pending", max_length=20),
                ),
                (
                    "billboard",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requests",
                        to="billboards.billboard",
                    ),
                ),
            ],
            options={
                "verbose_name": "Billboard request",
                "verbose_name_plural": "Billboard requests",
                "db_table": "billboard_requests",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["billboard", "start_date", "end_date"], name="bb_request_dates_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BillboardBooking",
            fields=reservation_fields() + [
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=20)),
                (
                    "billboard",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="billboards.billboard",
                    ),
                ),
            ],
            options={
                "verbose_name": "Billboard booking",
                "verbose_name_plural": "Billboard bookings",
                "db_table": "billboard_bookings",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["billboard", "start_date", "end_date"], name="bb_booking_dates_idx"),
                ],
            },
        ),
    ]
