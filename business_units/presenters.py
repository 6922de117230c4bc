from core.presenters import contact_buttons, gallery_items, testimonial_cards
from core.transforms import company_stats_as_list, normalize_team_members

DETAIL_TABS = ('overview', 'services', 'team', 'portfolio', 'testimonials', 'gallery', 'contact')
TAB_LABELS = {
    'overview': 'Ringkasan',
    'services': 'Layanan',
    'team': 'Tim',
    'portfolio': 'Portofolio',
    'testimonials': 'Testimoni',
    'gallery': 'Galeri',
    'contact': 'Kontak',
}


def visible_services(unit):
    return [service for service in unit.services_list if service.get('active', True)]


def detail_context(unit):
    """Everything the detail page and its tab partials render for ``unit``."""
    return {
        'business_unit': unit,
        'tabs': [(tab, TAB_LABELS[tab]) for tab in DETAIL_TABS],
        'services': visible_services(unit),
        'unit_services': unit.unit_services.all(),
        'more_about': [card for card in unit.more_about or [] if isinstance(card, dict)],
        'team_members': normalize_team_members(unit.team_members),
        'testimonials': testimonial_cards(unit.client_testimonials),
        'gallery': gallery_items(unit.name, unit.gallery_images),
        'company_stats': company_stats_as_list(unit.company_stats) if unit.section_visible('company_stats') else [],
        'portfolio_items': unit.portfolio_items if unit.section_visible('portfolio') else [],
        'certifications': unit.certifications if unit.section_visible('certifications') else [],
        'core_values': unit.core_values if unit.section_visible('core_values') else [],
        'achievements': unit.achievements if unit.section_visible('achievements') else [],
        'contact_buttons': contact_buttons(unit.name, unit.contact_email, unit.contact_phone),
        'contact_methods': unit.contact_methods(),
        'operating_hours': unit.operating_hours_list,
    }
