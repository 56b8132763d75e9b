from __future__ import annotations

from django.db import migrations, models


def blank_intents_to_null(apps, schema_editor):
    Booking = apps.get_model("bookings", "Booking")
    Booking.objects.filter(payment_intent_id="").update(payment_intent_id=None)


def null_intents_to_blank(apps, schema_editor):
    Booking = apps.get_model("bookings", "Booking")
    Booking.objects.filter(payment_intent_id__isnull=True).update(payment_intent_id="")


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="booking",
            name="payment_intent_id",
            field=models.CharField(blank=True, max_length=255, null=True),
        ),
        migrations.RunPython(blank_intents_to_null, null_intents_to_blank),
        migrations.AlterField(
            model_name="booking",
            name="payment_intent_id",
            field=models.CharField(blank=True, max_length=255, null=True, unique=True),
        ),
    ]
