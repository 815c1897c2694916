from decimal import Decimal, ROUND_HALF_UP
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
import uuid


class DealStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    SOLD = 'sold', 'Sold'
    EXPIRED = 'expired', 'Expired'


CENT = Decimal('0.01')


def compute_discounted_price(original_price, discount_percent):
    """original × (1 − discount/100), rounded half-up to cents."""
    price = Decimal(original_price) * (Decimal(100) - Decimal(discount_percent)) / Decimal(100)
    return price.quantize(CENT, rounding=ROUND_HALF_UP)


class DealQuerySet(models.QuerySet):

    def available(self, now=None):
        """Deals a buyer may see and reserve: active and not past expiry."""
        now = now or timezone.now()
        return self.filter(status=DealStatus.ACTIVE, expiry_time__gt=now)

    def overdue(self, now=None):
        """Deals still stored as active although their expiry has passed."""
        now = now or timezone.now()
        return self.filter(status=DealStatus.ACTIVE, expiry_time__lte=now)


class Deal(models.Model):
    """
    A vendor's discounted, quantity-limited, time-boxed offer.

    Lifecycle: active → sold | expired. Terminal states never go back to
    active. Expiry is also derived at read time through ``effective_status``
    so a deal past its ``expiry_time`` is treated as expired even before a
    sweep has updated the stored status.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='deals'
    )

    deal_title = models.CharField(max_length=200, blank=True)
    item_name = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Pricing
    original_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(CENT)]
    )
    discount_percent = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    discounted_price = models.DecimalField(max_digits=10, decimal_places=2, editable=False)

    # Stock
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    quantity_unit = models.CharField(max_length=30, default='items')
    remaining_quantity = models.PositiveIntegerField()

    # Availability window
    start_date = models.DateTimeField(default=timezone.now)
    expiry_time = models.DateTimeField(db_index=True)

    # Pickup location
    latitude = models.DecimalField(
        max_digits=10,
        decimal_places=8,
        validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    longitude = models.DecimalField(
        max_digits=11,
        decimal_places=8,
        validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )
    location_name = models.CharField(max_length=255, blank=True)

    image_url = models.CharField(max_length=500, blank=True)
    promo_code = models.CharField(max_length=50, blank=True)
    notify_customers = models.BooleanField(default=False)
    repeat_buyers_only = models.BooleanField(default=False)

    status = models.CharField(
        max_length=10,
        choices=DealStatus.choices,
        default=DealStatus.ACTIVE,
        db_index=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DealQuerySet.as_manager()

    class Meta:
        db_table = 'deals'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['latitude', 'longitude'], name='deals_latitud_5e0c7b_idx'),
            models.Index(fields=['status', 'expiry_time'], name='deals_status_2b9f4d_idx'),
            models.Index(fields=['vendor', '-created_at'], name='deals_vendor__8c1a3e_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='deal_quantity_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(remaining_quantity__gte=0) & models.Q(remaining_quantity__lte=models.F('quantity')),
                name='deal_remaining_within_quantity',
            ),
            models.CheckConstraint(
                condition=models.Q(discount_percent__gte=0) & models.Q(discount_percent__lte=100),
                name='deal_discount_percent_range',
            ),
            models.CheckConstraint(
                condition=models.Q(original_price__gt=0),
                name='deal_original_price_positive',
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    def save(self, *args, **kwargs):
        if self.original_price is not None and self.discount_percent is not None:
            self.discounted_price = compute_discounted_price(self.original_price, self.discount_percent)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and {'original_price', 'discount_percent'} & set(update_fields):
            kwargs['update_fields'] = set(update_fields) | {'discounted_price'}
        super().save(*args, **kwargs)

    @property
    def title(self):
        return self.deal_title or self.item_name

    def is_expired(self, now=None):
        now = now or timezone.now()
        return self.expiry_time <= now

    @property
    def effective_status(self):
        """Stored status, with an overdue active deal reported as expired."""
        if self.status == DealStatus.ACTIVE and self.is_expired():
            return DealStatus.EXPIRED
        return self.status

    @property
    def is_available(self):
        return self.effective_status == DealStatus.ACTIVE

    def time_remaining(self, now=None):
        """
        Countdown until expiry as ``hours``, ``minutes``, ``seconds`` and
        ``total_seconds``. All zero once the deal has expired.
        """
        now = now or timezone.now()
        total = int((self.expiry_time - now).total_seconds())
        if total <= 0:
            return {'hours': 0, 'minutes': 0, 'seconds': 0, 'total_seconds': 0}
        return {
            'hours': total // 3600,
            'minutes': (total // 60) % 60,
            'seconds': total % 60,
            'total_seconds': total,
        }


class DealTemplate(models.Model):
    """Reusable deal blueprint owned by a vendor."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='deal_templates'
    )
    template_name = models.CharField(max_length=100)
    item_name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    discount_percent = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    original_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(CENT)]
    )
    image_url = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'deal_templates'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.template_name} ({self.vendor_id})"
