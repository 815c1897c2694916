from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderStatus, OrderTracking


class OrderTrackingInline(admin.TabularInline):
    model = OrderTracking
    extra = 0
    readonly_fields = ['status', 'notes', 'created_by', 'created_at']
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for reservations."""

    list_display = [
        'id',
        'deal',
        'buyer',
        'status_badge',
        'purchase_date',
        'collected_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['buyer__email', 'buyer__name', 'buyer__phone', 'deal__item_name', 'tracking_id']
    raw_id_fields = ['deal', 'buyer']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [OrderTrackingInline]

    fieldsets = (
        ('Order', {
            'fields': ('deal', 'buyer', 'status', 'purchase_date', 'collected_at')
        }),
        ('Pickup', {
            'fields': (
                'tracking_id',
                'pickup_window_start',
                'pickup_window_end',
                'delivery_eta',
                'special_instructions',
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def status_badge(self, obj):
        colors = {
            OrderStatus.RESERVED: '#4A7BA7',
            OrderStatus.COLLECTED: '#6B8E5E',
            OrderStatus.MISSED: '#B85C5C',
            OrderStatus.EXPIRED: '#999',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#ccc'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'


@admin.register(OrderTracking)
class OrderTrackingAdmin(admin.ModelAdmin):
    list_display = ['order', 'status', 'created_by', 'created_at']
    list_filter = ['status']
    raw_id_fields = ['order', 'created_by']
