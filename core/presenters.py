"""Storage to display helpers shared by the business unit and club pages."""
from urllib.parse import quote

from django.conf import settings

from .transforms import normalize_gallery_images, normalize_testimonials


def gallery_items(name, images):
    """Gallery images with alt text and captions filled in for display."""
    items = []
    for number, image in enumerate(normalize_gallery_images(images), start=1):
        if not image['url']:
            continue
        items.append({
            **image,
            'alt': image['alt'] or f"{name} - Image {number}",
            'caption': image['caption'] or f"{name} community activities and events",
        })
    return items


def testimonial_cards(testimonials):
    cards = []
    for testimonial in normalize_testimonials(testimonials):
        cards.append({**testimonial, 'stars': '★' * testimonial['rating'] + '☆' * (5 - testimonial['rating'])})
    return cards


def mailto_link(email, subject=''):
    link = f"mailto:{email or settings.DEFAULT_CONTACT_EMAIL}"
    if subject:
        link += f"?subject={quote(subject)}"
    return link


def contact_buttons(name, email=None, phone=None):
    """
    Call-to-action buttons for a detail page: a mailto link (falling back to
    the site address) and a tel link, or a second mailto when there is no phone.
    """
    subject = f"Informasi tentang {name}"
    primary = {'label': 'Hubungi Kami', 'href': mailto_link(email, subject), 'kind': 'email'}
    if phone:
        secondary = {'label': 'Telepon', 'href': f"tel:{''.join(phone.split())}", 'kind': 'phone'}
    else:
        secondary = {'label': 'Kirim Email', 'href': mailto_link(email, subject), 'kind': 'email'}
    return [primary, secondary]
