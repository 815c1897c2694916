from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html
from .models import Deal, DealStatus, DealTemplate


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    """Admin interface for deals with stock and status overview."""

    list_display = [
        'title',
        'vendor',
        'discounted_price',
        'stock_display',
        'status_badge',
        'expiry_time',
        'created_at',
    ]
    list_filter = ['status', 'quantity_unit', 'notify_customers', 'created_at']
    search_fields = ['deal_title', 'item_name', 'vendor__email', 'vendor__name', 'location_name']
    raw_id_fields = ['vendor']
    readonly_fields = ['discounted_price', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Deal', {
            'fields': ('vendor', 'deal_title', 'item_name', 'description', 'image_url', 'promo_code')
        }),
        ('Pricing', {
            'fields': ('original_price', 'discount_percent', 'discounted_price')
        }),
        ('Stock', {
            'fields': ('quantity', 'quantity_unit', 'remaining_quantity', 'status')
        }),
        ('Availability', {
            'fields': ('start_date', 'expiry_time', 'notify_customers', 'repeat_buyers_only')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'location_name'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def stock_display(self, obj):
        return f"{obj.remaining_quantity}/{obj.quantity} {obj.quantity_unit}"
    stock_display.short_description = 'Stock'

    def status_badge(self, obj):
        """Show the effective status; overdue active deals show as expired."""
        colors = {
            DealStatus.ACTIVE: '#6B8E5E',
            DealStatus.SOLD: '#A47449',
            DealStatus.EXPIRED: '#B85C5C',
        }
        effective = obj.effective_status
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(effective, '#ccc'),
            effective,
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['expire_selected']

    @admin.action(description='Mark selected active deals as expired')
    def expire_selected(self, request, queryset):
        count = queryset.filter(status=DealStatus.ACTIVE).update(
            status=DealStatus.EXPIRED,
            updated_at=timezone.now(),
        )
        self.message_user(request, f'Expired {count} deal(s).')


@admin.register(DealTemplate)
class DealTemplateAdmin(admin.ModelAdmin):
    list_display = ['template_name', 'item_name', 'vendor', 'original_price', 'discount_percent', 'created_at']
    search_fields = ['template_name', 'item_name', 'vendor__email']
    raw_id_fields = ['vendor']
