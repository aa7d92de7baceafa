"""
Request validation for the projects API.

Stricter than ProjectStore.validate: length bounds, the category enum and
well-formed absolute URLs are all checked here, before the store is called.
"""

from urllib.parse import urlparse

VALID_CATEGORIES = ('basicweb', 'mern', 'android', 'lamp')

NAME_MAX = 200
DESC_MIN = 10
DESC_MAX = 1000
LIMIT_MAX = 100


def _clean(value):
    return value.strip() if isinstance(value, str) else value


def is_valid_url(value):
    """Absolute http(s)/ftp URL with an explicit scheme and a dotted host."""
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
    except ValueError:
        return False
    if parsed.scheme not in ('http', 'https', 'ftp') or not hostname:
        return False
    return '.' in hostname.strip('.')


def validate_project_payload(data):
    """Check a create/replace body.

    Returns ``(project, errors)``: the trimmed project dict ready for the
    store, and a list of ``{field, message}`` violations.
    """
    errors = []
    if not isinstance(data, dict):
        return None, [{'field': None, 'message': 'Request body must be a JSON object'}]

    name = _clean(data.get('name'))
    if not isinstance(name, str) or not name:
        errors.append({'field': 'name', 'message': 'Project name is required'})
    elif len(name) > NAME_MAX:
        errors.append({'field': 'name', 'message': f'Project name must be between 1 and {NAME_MAX} characters'})

    desc = _clean(data.get('desc'))
    if not isinstance(desc, str) or not desc:
        errors.append({'field': 'desc', 'message': 'Project description is required'})
    elif not DESC_MIN <= len(desc) <= DESC_MAX:
        errors.append({'field': 'desc', 'message': f'Project description must be between {DESC_MIN} and {DESC_MAX} characters'})

    category = data.get('category')
    if not category:
        errors.append({'field': 'category', 'message': 'Project category is required'})
    elif category not in VALID_CATEGORIES:
        errors.append({'field': 'category', 'message': f'Category must be one of: {", ".join(VALID_CATEGORIES)}'})

    image = _clean(data.get('image'))
    if not isinstance(image, str):
        errors.append({'field': 'image', 'message': 'Image must be a string'})
    elif not image:
        errors.append({'field': 'image', 'message': 'Project image is required'})

    links = data.get('links')
    if not isinstance(links, dict):
        links = {}
    view = _clean(links.get('view'))
    code = _clean(links.get('code'))
    for field, value, label in (('links.view', view, 'View link'), ('links.code', code, 'Code link')):
        if not value:
            errors.append({'field': field, 'message': f'{label} is required'})
        elif not is_valid_url(value):
            errors.append({'field': field, 'message': f'{label} must be a valid URL'})

    if errors:
        return None, errors

    project = {
        'name': name,
        'desc': desc,
        'category': category,
        'image': image,
        'links': {
            'view': view,
            'code': code
        }
    }
    return project, []


def parse_list_args(args):
    """Parse listing query parameters.

    Returns ``(params, errors)`` where params holds category, search, sort,
    limit and offset (None when absent).
    """
    errors = []
    params = {
        'category': (args.get('category') or '').strip() or None,
        'search': (args.get('search') or '').strip() or None,
        'sort': (args.get('sort') or '').strip() or None,
        'limit': None,
        'offset': None,
    }

    raw_limit = args.get('limit')
    if raw_limit not in (None, ''):
        try:
            params['limit'] = int(raw_limit)
            if not 1 <= params['limit'] <= LIMIT_MAX:
                raise ValueError
        except ValueError:
            errors.append({'field': 'limit', 'message': f'Limit must be an integer between 1 and {LIMIT_MAX}'})

    raw_offset = args.get('offset')
    if raw_offset not in (None, ''):
        try:
            params['offset'] = int(raw_offset)
            if params['offset'] < 0:
                raise ValueError
        except ValueError:
            errors.append({'field': 'offset', 'message': 'Offset must be a non-negative integer'})

    return params, errors
