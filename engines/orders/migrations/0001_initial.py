from decimal import Decimal

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core_identity_store", "0001_initial"),
        ("catalog", "0001_initial"),
        ("customer", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_no", models.CharField(max_length=32, unique=True)),
                ("order_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("confirmed", "Confirmed"),
                            ("shipped", "Shipped"),
                            ("delivered", "Delivered"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="draft",
                        max_length=32,
                    ),
                ),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("discount_percentage", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("discount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("tax", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        db_column="created_by_user_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="created_orders",
                        to="core_identity_store.user",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=models.deletion.PROTECT,
                        related_name="orders",
                        to="customer.customer",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_orders",
                "ordering": ["-order_date", "-id"],
                "indexes": [
                    models.Index(fields=["customer"], name="idx_orders_customer"),
                    models.Index(fields=["created_by"], name="idx_orders_created_by"),
                    models.Index(fields=["status"], name="idx_orders_status"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("qty", models.IntegerField()),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("line_total", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "book",
                    models.ForeignKey(
                        on_delete=models.deletion.PROTECT,
                        related_name="order_items",
                        to="catalog.book",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_order_items",
                "ordering": ["order_id", "id"],
                "indexes": [
                    models.Index(fields=["order"], name="idx_order_items_order"),
                    models.Index(fields=["book"], name="idx_order_items_book"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(qty__gt=0),
                        name="ck_order_items_qty_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CartItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("qty", models.IntegerField()),
                ("added_at", models.DateTimeField(auto_now_add=True)),
                (
                    "book",
                    models.ForeignKey(
                        on_delete=models.deletion.CASCADE,
                        related_name="cart_items",
                        to="catalog.book",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="user_id",
                        on_delete=models.deletion.CASCADE,
                        related_name="cart_items",
                        to="core_identity_store.user",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_cart_items",
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "book"),
                        name="uq_cart_items_user_book",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(qty__gt=0),
                        name="ck_cart_items_qty_positive",
                    ),
                ],
            },
        ),
    ]
