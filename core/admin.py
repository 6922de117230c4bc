from django.contrib import admin
from django.utils import timezone
from unfold.admin import ModelAdmin

from .models import ContactMessage, GlobalVariable

admin.site.site_header = "CIGI Global Operations"
admin.site.site_title = "CIGI Global Admin"
admin.site.index_title = "Dashboard"
admin.site.empty_value_display = "-empty-"


@admin.register(GlobalVariable)
class GlobalVariableAdmin(ModelAdmin):
    list_display = ('key', 'category', 'type', 'is_public', 'updated_at')
    list_filter = ('category', 'type', 'is_public')
    search_fields = ('key', 'value', 'description')


@admin.register(ContactMessage)
class ContactMessageAdmin(ModelAdmin):
    list_display = ('subject', 'name', 'email', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('name', 'email', 'subject', 'message')
    readonly_fields = ('ip_address', 'user_agent', 'read_at', 'created_at', 'updated_at')
    actions = ['mark_read', 'mark_archived']

    @admin.action(description="Mark selected messages as read")
    def mark_read(self, request, queryset):
        for contact_message in queryset:
            contact_message.mark_as_read()

    @admin.action(description="Archive selected messages")
    def mark_archived(self, request, queryset):
        for contact_message in queryset:
            contact_message.mark_as_archived()


def dashboard_callback(request, context):
    from business_units.models import BusinessUnit
    from community_clubs.models import CommunityClub

    stats = ContactMessage.stats()
    now = timezone.now()

    context.update({
        "kpi": [
            {
                "title": "Business Units",
                "metric": BusinessUnit.objects.active().count(),
                "footer": f"{BusinessUnit.objects.count()} in total",
            },
            {
                "title": "Community Clubs",
                "metric": CommunityClub.objects.active().count(),
                "footer": f"{CommunityClub.objects.count()} in total",
            },
            {
                "title": "Unread Messages",
                "metric": stats['unread'],
                "footer": f"{stats['recent']} received in the 7 days to {now.strftime('%d %B %Y')}",
            },
        ]
    })
    return context
