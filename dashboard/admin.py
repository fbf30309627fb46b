from django.contrib import admin

from .models import AdminUser, BlogPost, Booking, Experience, Villa


@admin.register(Villa)
class VillaAdmin(admin.ModelAdmin):
    list_display = ('name', 'price_per_night', 'bedrooms', 'guests', 'created_at')
    search_fields = ('name', 'description')


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'author', 'is_published', 'published_at')
    list_filter = ('category', 'is_published')
    search_fields = ('title', 'slug')


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('guest_name', 'villa', 'start_date', 'end_date', 'status', 'total_price')
    list_filter = ('status',)


admin.site.register(Experience)
admin.site.register(AdminUser)
