"""
Conversions between the flat shape a form edits and the nested shape that is
stored in JSON columns and rendered on the public pages.

Nothing in here touches the database, so the functions can be used from forms,
presenters, migrations and tests alike.
"""
import copy
import json
import logging

logger = logging.getLogger(__name__)

SOCIAL_LINK_PLATFORMS = ('linkedin', 'twitter', 'github')

# (flat form key, stored label, icon)
COMPANY_STATS = (
    ('years_in_business', 'Years in Business', '📅'),
    ('projects_completed', 'Projects Completed', '🚀'),
    ('clients_served', 'Clients Served', '👥'),
    ('team_size', 'Team Size', '👨‍💼'),
)

SERVICE_DEFAULTS = {
    'title': '',
    'description': '',
    'image': '',
    'price_range': '',
    'duration': '',
    'features': [],
    'technologies': [],
    'process_steps': [],
    'featured': False,
    'active': True,
}

ACTIVITY_DEFAULTS = {
    'title': '',
    'description': '',
    'image': '',
    'duration': '',
    'max_participants': None,
    'requirements': '',
    'benefits': [],
    'featured': False,
    'active': True,
}


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def social_link_key(platform):
    return f'social_links_{platform}'


# --- Social links -----------------------------------------------------------

def encode_social_links(flat):
    """Flat ``social_links_<platform>`` values to ``[{platform, url}]``, skipping blanks."""
    links = []
    for platform in SOCIAL_LINK_PLATFORMS:
        url = flat.get(social_link_key(platform))
        if not is_blank(url):
            links.append({'platform': platform, 'url': url.strip()})
    return links


def social_links_as_list(stored):
    """
    Normalizes either stored shape to ``[{platform, url}]``.

    Older records keep a ``{platform: url}`` mapping, newer ones a tagged list.
    Entries without a url are dropped.
    """
    if isinstance(stored, dict):
        pairs = list(stored.items())
    elif isinstance(stored, list):
        pairs = [(link.get('platform'), link.get('url')) for link in stored if isinstance(link, dict)]
    else:
        return []

    return [
        {'platform': str(platform or '').strip().lower(), 'url': str(url).strip()}
        for platform, url in pairs
        if not is_blank(url)
    ]


def decode_social_links(stored, fallback=None):
    """
    Stored social links back to the three flat form keys.

    ``fallback`` is the record itself for members saved with flat
    ``social_links_*`` keys next to (or instead of) the list.
    """
    by_platform = {}
    for link in social_links_as_list(stored):
        by_platform.setdefault(link['platform'], link['url'])

    flat = {}
    for platform in SOCIAL_LINK_PLATFORMS:
        key = social_link_key(platform)
        value = by_platform.get(platform, '')
        if not value and fallback and not is_blank(fallback.get(key)):
            value = str(fallback[key]).strip()
        flat[key] = value
    return flat


# --- Company stats ----------------------------------------------------------

def encode_company_stats(flat):
    stats = []
    for key, label, icon in COMPANY_STATS:
        value = flat.get(key)
        if not is_blank(value):
            stats.append({'label': label, 'value': str(value).strip(), 'icon': icon})
    return stats


def decode_company_stats(stored):
    flat = {key: '' for key, _, _ in COMPANY_STATS}

    if isinstance(stored, dict):
        for key in flat:
            if not is_blank(stored.get(key)):
                flat[key] = str(stored[key]).strip()
    elif isinstance(stored, list):
        keys_by_label = {label.lower(): key for key, label, _ in COMPANY_STATS}
        for stat in stored:
            if not isinstance(stat, dict):
                continue
            key = keys_by_label.get(str(stat.get('label', '')).strip().lower())
            if key and not is_blank(stat.get('value')):
                flat[key] = str(stat['value']).strip()
    return flat


def company_stats_as_list(stored):
    """Display shape of the stats, keeping custom labels stored by older editors."""
    if isinstance(stored, dict):
        return encode_company_stats(stored)
    if not isinstance(stored, list):
        return []

    icons = {label: icon for _, label, icon in COMPANY_STATS}
    stats = []
    for stat in stored:
        if not isinstance(stat, dict) or is_blank(stat.get('label')) or is_blank(stat.get('value')):
            continue
        label = str(stat['label']).strip()
        stats.append({
            'label': label,
            'value': str(stat['value']).strip(),
            'icon': stat.get('icon') or icons.get(label, ''),
        })
    return stats


# --- Record lists -----------------------------------------------------------

def normalize_gallery_images(images):
    if not isinstance(images, list):
        return []

    normalized = []
    for index, image in enumerate(images):
        if isinstance(image, str):
            image = {'url': image}
        elif not isinstance(image, dict):
            continue

        url = image.get('url')
        if isinstance(url, dict):
            # Media-library payloads nest the url one level down.
            url = url.get('url')

        media_id = image.get('media_id', image.get('mediaId'))
        normalized.append({
            'id': str(image.get('id') or f'img_{index}'),
            'url': url or '',
            'alt': image.get('alt') or '',
            'caption': image.get('caption') or '',
            'media_id': media_id if media_id not in ('', None) else None,
        })
    return normalized


def normalize_team_members(members):
    if not isinstance(members, list):
        return []

    normalized = []
    for index, member in enumerate(members):
        if not isinstance(member, dict):
            continue
        links = social_links_as_list(member.get('social_links'))
        if not links:
            links = encode_social_links(member)
        normalized.append({
            'id': str(member.get('id') or f'member_{index}'),
            'name': member.get('name') or '',
            'role': member.get('role') or '',
            'bio': member.get('bio') or '',
            'image': member.get('image') or '',
            'social_links': links,
        })
    return normalized


def coerce_rating(value, default=5):
    try:
        rating = int(value)
    except (TypeError, ValueError):
        return default
    if rating < 1 or rating > 5:
        return default
    return rating


def normalize_testimonials(testimonials):
    if not isinstance(testimonials, list):
        return []

    normalized = []
    for index, testimonial in enumerate(testimonials):
        if not isinstance(testimonial, dict):
            continue
        normalized.append({
            'id': str(testimonial.get('id') or f'testimonial_{index}'),
            'name': testimonial.get('name') or '',
            'role': testimonial.get('role') or '',
            'company': testimonial.get('company') or '',
            'content': testimonial.get('content') or '',
            'image': testimonial.get('image') or '',
            'rating': coerce_rating(testimonial.get('rating')),
            'featured': bool(testimonial.get('featured')),
        })
    return normalized


# --- Legacy text columns ----------------------------------------------------

def _load_json_list(text):
    if isinstance(text, list):
        return text
    try:
        decoded = json.loads(text)
    except (TypeError, ValueError):
        return None
    return decoded if isinstance(decoded, list) else None


def split_list(text, separator=None):
    """
    A JSON list when ``text`` decodes to one, otherwise the text split into
    trimmed, non-blank items.

    Without an explicit ``separator`` the text is split on newlines, or on
    commas when it has no newline.
    """
    if not text or (isinstance(text, str) and not text.strip()):
        return []

    decoded = _load_json_list(text)
    if decoded is not None:
        return [str(item).strip() for item in decoded if not is_blank(item) and not isinstance(item, (dict, list))]

    if separator is None:
        separator = '\n' if '\n' in text else ','
    return [item.strip() for item in text.split(separator) if item.strip()]


def parse_records(text, id_prefix, defaults, separator='\n'):
    """
    Records stored in a text column: a JSON array when possible, otherwise one
    record per non-blank line of legacy text (the line becomes the title).
    """
    if text is None or (isinstance(text, str) and not text.strip()):
        return []

    decoded = _load_json_list(text)
    if decoded is None:
        logger.debug("Stored %s text is not a JSON array; reading it as plain text.", id_prefix)
        decoded = split_list(text, separator)

    records = []
    for index, item in enumerate(decoded):
        if isinstance(item, str):
            if is_blank(item):
                continue
            item = {'title': item.strip()}
        elif not isinstance(item, dict):
            continue
        record = copy.deepcopy(defaults)
        record.update(item)
        record['id'] = str(item.get('id') or f'{id_prefix}_{index}')
        records.append(record)
    return records


def parse_services(text):
    return parse_records(text, 'service', SERVICE_DEFAULTS, separator='\n')


def parse_activities(text):
    # Older club rows used comma separated activities.
    separator = '\n' if isinstance(text, str) and '\n' in text else ','
    return parse_records(text, 'activity', ACTIVITY_DEFAULTS, separator=separator)


def dump_records(records):
    if not records:
        return ''
    return json.dumps(records, ensure_ascii=False)


def record_titles(records):
    return [record['title'] for record in records if not is_blank(record.get('title'))]
