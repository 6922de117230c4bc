from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import BusinessUnit, BusinessUnitService


class BusinessUnitServiceInline(TabularInline):
    model = BusinessUnitService
    fields = ('title', 'price_range', 'duration')
    extra = 0


@admin.register(BusinessUnit)
class BusinessUnitAdmin(ModelAdmin):
    list_display = ('name', 'slug', 'is_active', 'sort_order', 'updated_at')
    list_editable = ('is_active', 'sort_order')
    list_filter = ('is_active',)
    search_fields = ('name', 'description', 'services')
    prepopulated_fields = {'slug': ('name',)}
    inlines = [BusinessUnitServiceInline]


@admin.register(BusinessUnitService)
class BusinessUnitServiceAdmin(ModelAdmin):
    list_display = ('title', 'business_unit', 'price_range', 'duration', 'created_at')
    list_filter = ('business_unit',)
    search_fields = ('title', 'description', 'business_unit__name')
