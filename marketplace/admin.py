from django.contrib import admin

from .models import Gig, Review


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    fields = ('reviewer', 'reviewer_name', 'star', 'comment', 'created_at')
    readonly_fields = fields
    can_delete = False


@admin.register(Gig)
class GigAdmin(admin.ModelAdmin):
    list_display = ('title', 'seller', 'category', 'price', 'delivery_time',
                    'rating', 'reviews_count', 'status', 'created_at')
    list_filter = ('status', 'category', 'created_at')
    search_fields = ('title', 'description', 'seller__username', 'seller__email')
    # Rating aggregates are maintained by the reputation service only
    readonly_fields = ('id', 'rating', 'total_stars', 'reviews_count', 'created_at', 'updated_at')

    inlines = [ReviewInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'seller', 'title', 'description', 'category')
        }),
        ('Pricing & Delivery', {
            'fields': ('price', 'delivery_time', 'image_url')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Reputation', {
            'fields': ('rating', 'total_stars', 'reviews_count'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('seller')


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('gig', 'reviewer_name', 'star', 'created_at')
    list_filter = ('star', 'created_at')
    search_fields = ('gig__title', 'reviewer_name', 'comment')
    readonly_fields = ('gig', 'reviewer', 'reviewer_name', 'star', 'created_at')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('gig', 'reviewer')
