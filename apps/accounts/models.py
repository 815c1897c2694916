from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
import uuid


class UserRole(models.TextChoices):
    VENDOR = 'vendor', 'Vendor'
    BUYER = 'buyer', 'Buyer'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        if not extra_fields.get('phone'):
            raise ValueError('Phone number is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('phone_verified', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Marketplace account, either a vendor or a buyer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, unique=True)
    role = models.CharField(max_length=10, choices=UserRole.choices, default=UserRole.BUYER)

    phone_verified = models.BooleanField(default=False)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name', 'phone']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email'], name='users_email_4b85f2_idx'),
            models.Index(fields=['role'], name='users_role_0ace22_idx'),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}> ({self.role})"

    @property
    def is_vendor(self):
        return self.role == UserRole.VENDOR

    @property
    def is_buyer(self):
        return self.role == UserRole.BUYER


class VendorProfile(models.Model):
    """Shop details and location of a vendor."""

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='vendor_profile'
    )
    full_name = models.CharField(max_length=100)
    shop_name = models.CharField(max_length=150)
    vendor_type = models.CharField(max_length=100, blank=True)
    phone_number = models.CharField(max_length=20, blank=True)

    latitude = models.DecimalField(
        max_digits=10,
        decimal_places=8,
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    longitude = models.DecimalField(
        max_digits=11,
        decimal_places=8,
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )
    location_name = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vendor_profile'
        indexes = [
            models.Index(fields=['latitude', 'longitude'], name='vendor_prof_latitud_3c1e9a_idx'),
        ]

    def __str__(self):
        return self.shop_name

    @property
    def has_location(self):
        return self.latitude is not None and self.longitude is not None


class BuyerProfile(models.Model):
    """Display name and saved search location of a buyer."""

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='buyer_profile'
    )
    full_name = models.CharField(max_length=100)
    latitude = models.DecimalField(
        max_digits=10,
        decimal_places=8,
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    longitude = models.DecimalField(
        max_digits=11,
        decimal_places=8,
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'buyer_profile'

    def __str__(self):
        return self.full_name


class OneTimePassword(models.Model):
    """Phone verification code issued during registration."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone_number = models.CharField(max_length=20, db_index=True)
    code = models.CharField(max_length=6)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'otps'
        ordering = ['-created_at']

    def __str__(self):
        return f"OTP for {self.phone_number} ({self.created_at:%Y-%m-%d %H:%M:%S})"

    def is_expired(self, validity, now=None):
        """Return True once more than ``validity`` (timedelta) has passed."""
        now = now or timezone.now()
        return now - self.created_at > validity


class CustomerFavorite(models.Model):
    """A buyer following a vendor."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    buyer = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='favorite_vendors'
    )
    vendor = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='favorited_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customer_favorites'
        unique_together = [['buyer', 'vendor']]
        indexes = [
            models.Index(fields=['buyer'], name='customer_fa_buyer_i_6d2f11_idx'),
            models.Index(fields=['vendor'], name='customer_fa_vendor__9a4e27_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.buyer.name} -> {self.vendor.name}"

