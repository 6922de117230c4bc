from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import CommunityClub, CommunityClubActivity


class CommunityClubActivityInline(TabularInline):
    model = CommunityClubActivity
    fields = ('title', 'status', 'is_active', 'featured')
    extra = 0


@admin.register(CommunityClub)
class CommunityClubAdmin(ModelAdmin):
    list_display = ('name', 'type', 'is_active', 'sort_order', 'updated_at')
    list_editable = ('is_active', 'sort_order')
    list_filter = ('type', 'is_active')
    search_fields = ('name', 'description', 'activities')
    prepopulated_fields = {'slug': ('name',)}
    inlines = [CommunityClubActivityInline]


@admin.register(CommunityClubActivity)
class CommunityClubActivityAdmin(ModelAdmin):
    list_display = ('title', 'community_club', 'status', 'featured', 'is_active', 'created_at')
    list_filter = ('status', 'featured', 'is_active', 'community_club')
    search_fields = ('title', 'description', 'community_club__name')
