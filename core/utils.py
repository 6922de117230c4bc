from django.utils.text import slugify


def unique_slugify(instance, value, slug_field='slug'):
    """
    A slug for ``value`` that no other row of the instance's model uses.
    Collisions get a numeric suffix (``name-2``, ``name-3``, ...).
    """
    model = instance.__class__
    max_length = model._meta.get_field(slug_field).max_length
    base = slugify(value)[:max_length] or model._meta.model_name
    candidate = base
    counter = 2

    queryset = model._default_manager.all()
    if instance.pk:
        queryset = queryset.exclude(pk=instance.pk)

    while queryset.filter(**{slug_field: candidate}).exists():
        suffix = f'-{counter}'
        candidate = f'{base[:max_length - len(suffix)]}{suffix}'
        counter += 1
    return candidate


def client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')
