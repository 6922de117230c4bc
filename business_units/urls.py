from django.urls import path
from . import views

app_name = 'business_units'

urlpatterns = [
    path('unit-bisnis/', views.business_unit_list, name='list'),
    path('unit-bisnis/<slug:slug>/', views.business_unit_detail, name='detail'),
    path('unit-bisnis/<slug:slug>/tab/<str:tab>/', views.business_unit_tab, name='tab'),

    # Staff
    path('staff/business-units/', views.BusinessUnitStaffListView.as_view(), name='staff_list'),
    path('staff/business-units/new/', views.BusinessUnitCreateView.as_view(), name='staff_create'),
    path('staff/business-units/<slug:slug>/', views.BusinessUnitStaffDetailView.as_view(), name='staff_detail'),
    path('staff/business-units/<slug:slug>/edit/', views.BusinessUnitUpdateView.as_view(), name='staff_update'),
    path('staff/business-units/<slug:slug>/delete/', views.BusinessUnitDeleteView.as_view(), name='staff_delete'),
    path('staff/business-unit-services/', views.BusinessUnitServiceListView.as_view(), name='staff_service_list'),
    path('staff/business-unit-services/new/', views.BusinessUnitServiceCreateView.as_view(), name='staff_service_create'),
    path('staff/business-unit-services/<int:pk>/', views.BusinessUnitServiceDetailView.as_view(), name='staff_service_detail'),
    path('staff/business-unit-services/<int:pk>/edit/', views.BusinessUnitServiceUpdateView.as_view(), name='staff_service_update'),
    path('staff/business-unit-services/<int:pk>/delete/', views.BusinessUnitServiceDeleteView.as_view(), name='staff_service_delete'),
]
