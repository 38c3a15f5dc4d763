import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Collection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="collections", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [models.Index(fields=["owner", "created_at"], name="collection_owner_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="Card",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("front", models.TextField()),
                ("back", models.TextField()),
                ("interval_minutes", models.PositiveBigIntegerField(default=0)),
                ("ease_factor", models.FloatField(default=2.5)),
                ("repetitions", models.PositiveIntegerField(default=0)),
                ("next_review_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("collection", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="cards", to="scheduler.collection")),
            ],
            options={
                "indexes": [models.Index(fields=["collection", "next_review_at"], name="card_collection_due_idx")],
            },
        ),
        migrations.CreateModel(
            name="ReviewLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rating", models.CharField(choices=[("again", "again"), ("hard", "hard"), ("good", "good"), ("easy", "easy")], max_length=8)),
                ("idempotency_key", models.CharField(blank=True, max_length=64, null=True)),
                ("reviewed_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("interval_minutes", models.PositiveBigIntegerField()),
                ("ease_factor", models.FloatField()),
                ("repetitions", models.PositiveIntegerField()),
                ("next_review_at", models.DateTimeField()),
                ("card", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="scheduler.card")),
            ],
            options={
                "indexes": [models.Index(fields=["card", "reviewed_at"], name="reviewlog_card_reviewed_idx")],
                "constraints": [models.UniqueConstraint(fields=("card", "idempotency_key"), name="unique_review_idempotency_key")],
            },
        ),
    ]
