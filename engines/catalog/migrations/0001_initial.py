from decimal import Decimal

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core_identity_store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Book",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("isbn", models.CharField(blank=True, max_length=32, null=True)),
                ("title", models.CharField(max_length=500)),
                ("author", models.CharField(blank=True, max_length=255, null=True)),
                ("publisher", models.CharField(blank=True, max_length=255, null=True)),
                ("category", models.CharField(blank=True, max_length=64, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("stock_qty", models.IntegerField(default=0)),
                ("reorder_level", models.IntegerField(default=10)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "pbd_books",
                "ordering": ["title", "id"],
                "indexes": [
                    models.Index(fields=["title"], name="idx_books_title"),
                    models.Index(fields=["isbn"], name="idx_books_isbn"),
                    models.Index(fields=["category"], name="idx_books_category"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(stock_qty__gte=0),
                        name="ck_books_stock_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(unit_price__gte=0),
                        name="ck_books_unit_price_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockReceipt",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("receipt_no", models.CharField(max_length=32, unique=True)),
                ("publisher", models.CharField(blank=True, max_length=255, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                ("received_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "received_by",
                    models.ForeignKey(
                        db_column="received_by_user_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="stock_receipts",
                        to="core_identity_store.user",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_stock_receipts",
                "ordering": ["-received_at", "-id"],
                "indexes": [
                    models.Index(fields=["received_by"], name="idx_stock_rcpt_received_by"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockReceiptItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("qty", models.IntegerField()),
                (
                    "book",
                    models.ForeignKey(
                        on_delete=models.deletion.PROTECT,
                        related_name="receipt_items",
                        to="catalog.book",
                    ),
                ),
                (
                    "receipt",
                    models.ForeignKey(
                        on_delete=models.deletion.CASCADE,
                        related_name="items",
                        to="catalog.stockreceipt",
                    ),
                ),
            ],
            options={
                "db_table": "pbd_stock_receipt_items",
                "ordering": ["receipt_id", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(qty__gt=0),
                        name="ck_stock_rcpt_item_qty_positive",
                    ),
                ],
            },
        ),
    ]
