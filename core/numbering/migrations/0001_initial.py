from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SequenceCounter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sequence_key", models.CharField(max_length=64)),
                ("period_key", models.CharField(blank=True, default="", max_length=16)),
                ("next_value", models.PositiveIntegerField(default=1)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "pbd_sequence_counters",
                "ordering": ["sequence_key", "period_key"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("sequence_key", "period_key"),
                        name="uq_sequence_counter_key_period",
                    ),
                ],
            },
        ),
    ]
