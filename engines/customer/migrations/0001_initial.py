from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core_identity_store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "customer_type",
                    models.CharField(
                        choices=[
                            ("school", "School"),
                            ("bookstore", "Bookstore"),
                            ("institution", "Institution"),
                            ("customer", "Customer"),
                        ],
                        default="customer",
                        max_length=32,
                    ),
                ),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("email", models.EmailField(blank=True, max_length=255, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("credit_limit", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("notes", models.TextField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "linked_user",
                    models.OneToOneField(
                        blank=True,
                        db_column="linked_user_id",
                        null=True,
                        on_delete=models.deletion.SET_NULL,
                        related_name="customer",
                        to="core_identity_store.user",
                    ),
                ),
                (
                    "assigned_salesman",
                    models.ForeignKey(
                        blank=True,
                        db_column="assigned_salesman_user_id",
                        null=True,
                        on_delete=models.deletion.SET_NULL,
                        related_name="assigned_customers",
                        to="core_identity_store.user",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_customers",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["customer_type"], name="idx_customers_type"),
                    models.Index(fields=["assigned_salesman"], name="idx_customers_salesman"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(credit_limit__gte=0),
                        name="ck_customers_credit_limit_non_negative",
                    ),
                ],
            },
        ),
    ]
