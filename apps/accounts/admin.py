from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole, VendorProfile, BuyerProfile, OneTimePassword, CustomerFavorite


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for marketplace accounts.

    Lists vendors and buyers side by side with role and phone verification
    badges, and offers bulk activation actions.
    """

    list_display = [
        'email',
        'name',
        'phone',
        'role_badge',
        'phone_verified_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'phone_verified',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
        'phone',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'name', 'phone', 'role', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Verification', {
            'fields': ('phone_verified',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'phone', 'role', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        color = '#2E7D32' if obj.role == UserRole.VENDOR else '#1565C0'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def phone_verified_badge(self, obj):
        if obj.phone_verified:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Verified</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Pending</span>'
        )
    phone_verified_badge.short_description = 'Phone'
    phone_verified_badge.admin_order_field = 'phone_verified'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)


@admin.register(VendorProfile)
class VendorProfileAdmin(admin.ModelAdmin):
    list_display = ['shop_name', 'full_name', 'vendor_type', 'phone_number', 'location_name', 'updated_at']
    list_filter = ['vendor_type']
    search_fields = ['shop_name', 'full_name', 'user__email', 'phone_number']
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Shop', {
            'fields': ('user', 'full_name', 'shop_name', 'vendor_type', 'phone_number')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'location_name')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )


@admin.register(BuyerProfile)
class BuyerProfileAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'user', 'latitude', 'longitude', 'updated_at']
    search_fields = ['full_name', 'user__email']
    raw_id_fields = ['user']


@admin.register(OneTimePassword)
class OneTimePasswordAdmin(admin.ModelAdmin):
    list_display = ['phone_number', 'created_at']
    search_fields = ['phone_number']
    readonly_fields = ['phone_number', 'code', 'created_at']


@admin.register(CustomerFavorite)
class CustomerFavoriteAdmin(admin.ModelAdmin):
    list_display = ['buyer', 'vendor', 'created_at']
    search_fields = ['buyer__email', 'vendor__email']
    raw_id_fields = ['buyer', 'vendor']
