from core.presenters import contact_buttons, gallery_items, testimonial_cards
from core.transforms import social_links_as_list

DETAIL_TABS = ('overview', 'activities', 'events', 'testimonials', 'gallery', 'contact')
TAB_LABELS = {
    'overview': 'Ringkasan',
    'activities': 'Kegiatan',
    'events': 'Acara',
    'testimonials': 'Testimoni',
    'gallery': 'Galeri',
    'contact': 'Kontak',
}


def visible_activities(club):
    return [activity for activity in club.activity_records if activity.get('active', True)]


def upcoming_events(club):
    return [event for event in club.upcoming_events or [] if isinstance(event, dict)]


def club_statistics(club):
    return [
        {'label': 'Anggota', 'value': club.member_count or 0},
        {'label': 'Tahun Aktif', 'value': club.years_active},
        {'label': 'Kegiatan', 'value': club.activities_count},
        {'label': 'Acara Mendatang', 'value': len(upcoming_events(club))},
    ]


def detail_context(club):
    """Everything the detail page and its tab partials render for ``club``."""
    return {
        'club': club,
        'tabs': [(tab, TAB_LABELS[tab]) for tab in DETAIL_TABS],
        'activities': visible_activities(club),
        'club_activities': club.club_activities.filter(is_active=True),
        'more_about': [card for card in club.more_about or [] if isinstance(card, dict)],
        'statistics': club_statistics(club),
        'upcoming_events': upcoming_events(club),
        'achievements': [item for item in club.achievements or [] if isinstance(item, dict)],
        'testimonials': testimonial_cards(club.testimonials),
        'gallery': gallery_items(club.name, club.gallery_images),
        'social_links': social_links_as_list(club.social_media_links),
        'contact_buttons': contact_buttons(club.name, club.contact_email, club.contact_phone),
        'contact_methods': club.contact_methods(),
    }
