import django.db.models.deletion
from django.db import migrations, models

import tenant_events.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=tenant_events.models.new_entity_id,
                        editable=False,
                        max_length=24,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("tenant_id", models.CharField(db_index=True, max_length=64)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("CONFERENCE", "Conference"),
                            ("WORKSHOP", "Workshop"),
                            ("SEMINAR", "Seminar"),
                            ("WEBINAR", "Webinar"),
                            ("MEETING", "Meeting"),
                            ("EXPOSITION", "Exposition"),
                            ("FESTIVAL", "Festival"),
                            ("SPORTING_EVENT", "Sporting Event"),
                            ("CONCERT", "Concert"),
                            ("GALA", "Gala"),
                            ("SYMPOSIUM", "Symposium"),
                            ("SUMMIT", "Summit"),
                            ("OTHER", "Other"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "format",
                    models.CharField(
                        choices=[
                            ("ONLINE", "Online"),
                            ("IN_PERSON", "In Person"),
                            ("HYBRID", "Hybrid"),
                            ("OTHER", "Other"),
                        ],
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("SCHEDULED", "Scheduled"),
                            ("PUBLISHED", "Published"),
                            ("ACTIVE", "Active"),
                            ("COMPLETED", "Completed"),
                            ("CANCELLED", "Cancelled"),
                            ("ARCHIVED", "Archived"),
                        ],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField()),
                ("number_of_participants", models.PositiveIntegerField(default=0)),
                (
                    "currency",
                    models.CharField(
                        choices=[
                            ("USD", "Usd"),
                            ("EUR", "Eur"),
                            ("JPY", "Jpy"),
                            ("GBP", "Gbp"),
                            ("CAD", "Cad"),
                            ("INR", "Inr"),
                            ("FBU", "Fbu"),
                            ("AUD", "Aud"),
                            ("CHF", "Chf"),
                            ("CNY", "Cny"),
                            ("BRL", "Brl"),
                            ("RUB", "Rub"),
                            ("ZAR", "Zar"),
                            ("KRW", "Krw"),
                            ("SGD", "Sgd"),
                            ("NZD", "Nzd"),
                            ("MXN", "Mxn"),
                            ("HKD", "Hkd"),
                            ("SEK", "Sek"),
                            ("NOK", "Nok"),
                            ("TRY", "Try"),
                            ("AED", "Aed"),
                            ("SAR", "Sar"),
                            ("THB", "Thb"),
                        ],
                        max_length=3,
                    ),
                ),
                ("is_public", models.BooleanField(default=False)),
                ("created_by", models.CharField(blank=True, max_length=24, null=True)),
                ("updated_by", models.CharField(blank=True, max_length=24, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["start_date", "id"],
                "indexes": [
                    models.Index(
                        fields=["tenant_id", "start_date"], name="event_tenant_start_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Speaker",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=tenant_events.models.new_entity_id,
                        editable=False,
                        max_length=24,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("tenant_id", models.CharField(db_index=True, max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("bio", models.TextField(blank=True, null=True)),
                ("company", models.CharField(blank=True, max_length=255, null=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("linkedin_url", models.URLField(blank=True, max_length=500, null=True)),
                (
                    "speaker_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("SPEAKER", "Speaker"),
                            ("MODERATOR", "Moderator"),
                            ("PANELIST", "Panelist"),
                            ("PRESENTER", "Presenter"),
                            ("GUEST", "Guest"),
                            ("KEYNOTE_SPEAKER", "Keynote Speaker"),
                            ("VIP", "Vip"),
                            ("FACILITATOR", "Facilitator"),
                            ("WORKSHOP_LEADER", "Workshop Leader"),
                            ("TRAINER", "Trainer"),
                            ("GUEST_OF_HONOR", "Guest Of Honor"),
                            ("ANALYST", "Analyst"),
                            ("INFLUENCER", "Influencer"),
                            ("ROUNDTABLE_HOST", "Roundtable Host"),
                        ],
                        max_length=32,
                        null=True,
                    ),
                ),
            ],
            options={
                "ordering": ["name", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("tenant_id", "name"), name="unique_speaker_name_per_tenant"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="EventLocation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0)),
                ("name", models.CharField(max_length=255)),
                ("address", models.CharField(max_length=500)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="locations",
                        to="tenant_events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="EventSchedule",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=tenant_events.models.new_entity_id,
                        editable=False,
                        max_length=24,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("tenant_id", models.CharField(db_index=True, max_length=64)),
                ("event_id", models.CharField(max_length=255)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "session_type",
                    models.CharField(
                        choices=[
                            ("KEYNOTE", "Keynote"),
                            ("WORKSHOP", "Workshop"),
                            ("PANEL_DISCUSSION", "Panel Discussion"),
                            ("BREAK", "Break"),
                            ("LUNCH", "Lunch"),
                            ("NETWORKING", "Networking"),
                            ("CLOSING_REMARKS", "Closing Remarks"),
                            ("OTHER", "Other"),
                            ("SESSION", "Session"),
                        ],
                        max_length=32,
                    ),
                ),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField()),
                ("location", models.CharField(blank=True, max_length=255, null=True)),
            ],
            options={
                "ordering": ["start_time", "id"],
                "indexes": [
                    models.Index(
                        fields=["tenant_id", "start_time"], name="schedule_tenant_start_idx"
                    ),
                    models.Index(
                        fields=["tenant_id", "event_id"], name="schedule_tenant_event_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ScheduleSpeaker",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "schedule",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="speaker_links",
                        to="tenant_events.eventschedule",
                    ),
                ),
                (
                    "speaker",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="schedule_links",
                        to="tenant_events.speaker",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("schedule", "speaker"), name="unique_schedule_speaker"
                    )
                ],
            },
        ),
        migrations.AddField(
            model_name="eventschedule",
            name="speakers",
            field=models.ManyToManyField(
                related_name="schedules",
                through="tenant_events.ScheduleSpeaker",
                to="tenant_events.speaker",
            ),
        ),
    ]
