from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('', views.home, name='home'),
    path('tentang-kami/', views.about_page, name='about'),
    path('kontak/', views.contact_page, name='contact'),
    path('api/navigation/', views.navigation_data, name='navigation_data'),
    path('api/navigation/clear-cache/', views.navigation_cache_clear, name='navigation_cache_clear'),

    # Staff
    path('staff/', views.StaffDashboardView.as_view(), name='staff_dashboard'),
    path('staff/contact-messages/', views.ContactMessageListView.as_view(), name='staff_contact_message_list'),
    path('staff/contact-messages/bulk/', views.ContactMessageBulkActionView.as_view(), name='staff_contact_message_bulk'),
    path('staff/contact-messages/<int:pk>/', views.ContactMessageDetailView.as_view(), name='staff_contact_message_detail'),
    path('staff/contact-messages/<int:pk>/status/', views.ContactMessageStatusView.as_view(), name='staff_contact_message_status'),
    path('staff/contact-messages/<int:pk>/delete/', views.ContactMessageDeleteView.as_view(), name='staff_contact_message_delete'),
    path('staff/global-variables/', views.GlobalVariableListView.as_view(), name='staff_global_variable_list'),
    path('staff/global-variables/new/', views.GlobalVariableCreateView.as_view(), name='staff_global_variable_create'),
    path('staff/global-variables/<int:pk>/', views.GlobalVariableDetailView.as_view(), name='staff_global_variable_detail'),
    path('staff/global-variables/<int:pk>/edit/', views.GlobalVariableUpdateView.as_view(), name='staff_global_variable_update'),
    path('staff/global-variables/<int:pk>/delete/', views.GlobalVariableDeleteView.as_view(), name='staff_global_variable_delete'),
]
