from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core_identity_store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DiscountRule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rule_name", models.CharField(max_length=255)),
                ("discount_percentage", models.DecimalField(decimal_places=2, max_digits=5)),
                ("min_order_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("valid_from", models.DateTimeField(blank=True, null=True)),
                ("valid_to", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        db_column="created_by_user_id",
                        null=True,
                        on_delete=models.deletion.SET_NULL,
                        related_name="discount_rules",
                        to="core_identity_store.user",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_discount_rules",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["is_active"], name="idx_discount_rules_active"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(discount_percentage__gte=0)
                        & models.Q(discount_percentage__lte=100),
                        name="ck_discount_rules_pct_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(min_order_amount__gte=0),
                        name="ck_discount_rules_min_amount",
                    ),
                ],
            },
        ),
    ]
