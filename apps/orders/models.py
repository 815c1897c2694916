from django.db import models
from django.utils import timezone
import uuid


class OrderStatus(models.TextChoices):
    RESERVED = 'reserved', 'Reserved'
    COLLECTED = 'collected', 'Collected'
    MISSED = 'missed', 'Missed'
    EXPIRED = 'expired', 'Expired'


# Orders in these states count towards vendor revenue
REVENUE_STATUSES = [OrderStatus.COLLECTED, OrderStatus.RESERVED]


class Order(models.Model):
    """A buyer's reservation against a deal."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    deal = models.ForeignKey(
        'deals.Deal',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    buyer = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='orders'
    )

    status = models.CharField(
        max_length=10,
        choices=OrderStatus.choices,
        default=OrderStatus.RESERVED,
        db_index=True
    )
    purchase_date = models.DateTimeField(default=timezone.now)

    # Pickup tracking (filled in by the vendor)
    tracking_id = models.CharField(max_length=50, blank=True)
    pickup_window_start = models.DateTimeField(null=True, blank=True)
    pickup_window_end = models.DateTimeField(null=True, blank=True)
    special_instructions = models.TextField(blank=True)
    delivery_eta = models.DateTimeField(null=True, blank=True)
    collected_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        unique_together = [['buyer', 'deal']]
        indexes = [
            models.Index(fields=['buyer', '-created_at'], name='orders_buyer_i_4a7d20_idx'),
            models.Index(fields=['deal', 'status'], name='orders_deal_id_7e3b52_idx'),
        ]

    def __str__(self):
        return f"{self.buyer.email} - {self.deal.title} ({self.status})"

    @property
    def is_reserved(self):
        return self.status == OrderStatus.RESERVED


class OrderTracking(models.Model):
    """Append-only history of an order's status changes and tracking updates."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='tracking_history'
    )
    status = models.CharField(max_length=10, choices=OrderStatus.choices)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_tracking'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.order_id}: {self.status}"
