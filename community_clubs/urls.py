from django.urls import path
from . import views

app_name = 'community_clubs'

urlpatterns = [
    path('komunitas/', views.community_club_list, name='list'),
    path('komunitas/<slug:slug>/', views.community_club_detail, name='detail'),
    path('komunitas/<slug:slug>/tab/<str:tab>/', views.community_club_tab, name='tab'),

    # Staff
    path('staff/community-clubs/', views.CommunityClubStaffListView.as_view(), name='staff_list'),
    path('staff/community-clubs/new/', views.CommunityClubCreateView.as_view(), name='staff_create'),
    path('staff/community-clubs/<slug:slug>/', views.CommunityClubStaffDetailView.as_view(), name='staff_detail'),
    path('staff/community-clubs/<slug:slug>/edit/', views.CommunityClubUpdateView.as_view(), name='staff_update'),
    path('staff/community-clubs/<slug:slug>/delete/', views.CommunityClubDeleteView.as_view(), name='staff_delete'),
    path('staff/community-club-activities/', views.CommunityClubActivityListView.as_view(), name='staff_activity_list'),
    path('staff/community-club-activities/new/', views.CommunityClubActivityCreateView.as_view(), name='staff_activity_create'),
    path('staff/community-club-activities/<int:pk>/', views.CommunityClubActivityDetailView.as_view(), name='staff_activity_detail'),
    path('staff/community-club-activities/<int:pk>/edit/', views.CommunityClubActivityUpdateView.as_view(), name='staff_activity_update'),
    path('staff/community-club-activities/<int:pk>/delete/', views.CommunityClubActivityDeleteView.as_view(), name='staff_activity_delete'),
]
