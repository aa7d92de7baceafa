"""
Read-only views over a loaded project list.

Every function takes a sequence of project dicts and returns a new list;
nothing here touches the store or mutates its input.
"""

from collections import Counter, namedtuple

SORT_KEYS = ('name', 'name-desc', 'category')

Page = namedtuple('Page', ['items', 'total', 'has_more', 'limit', 'offset'])


def _text(value):
    return value.lower() if isinstance(value, str) else ''


def by_category(projects, category):
    """Projects whose category equals ``category`` exactly, in input order."""
    return [p for p in projects if p.get('category') == category]


def search(projects, term):
    """Case-insensitive substring match on name or description."""
    needle = (term or '').lower()
    return [
        p for p in projects
        if needle in _text(p.get('name')) or needle in _text(p.get('desc'))
    ]


def sort_projects(projects, key=None):
    """Stable sort by ``name``, ``name-desc`` or ``category`` (name tiebreak).

    Any other key leaves the input order untouched.
    """
    if key == 'name':
        return sorted(projects, key=lambda p: _text(p.get('name')))
    if key == 'name-desc':
        return sorted(projects, key=lambda p: _text(p.get('name')), reverse=True)
    if key == 'category':
        return sorted(projects, key=lambda p: (_text(p.get('category')), _text(p.get('name'))))
    return list(projects)


def paginate(projects, limit=None, offset=None):
    """Slice ``[offset, offset + limit)`` out of ``projects``.

    Without a limit the whole set (from ``offset``) is returned and
    ``has_more`` is False.
    """
    total = len(projects)
    start = offset or 0
    if limit is None:
        return Page(list(projects[start:]), total, False, None, start)
    return Page(list(projects[start:start + limit]), total, start + limit < total, limit, start)


def category_counts(projects):
    """Number of projects per category."""
    return dict(Counter(p.get('category') for p in projects if p.get('category')))


class ProjectView:
    """Immutable snapshot of a project list with chained filters.

    Replaces the dashboard's shared "all projects" / "filtered projects"
    arrays: each step returns a new view and the source list is never
    modified.

        view = ProjectView(store.load_all())
        page = view.filter(category='mern', term='chat').sort('name').page(10, 0)
    """

    def __init__(self, projects):
        self._projects = tuple(projects)

    def __len__(self):
        return len(self._projects)

    def __iter__(self):
        return iter(self._projects)

    @property
    def projects(self):
        return list(self._projects)

    def filter(self, category=None, term=None):
        projects = self._projects
        if category:
            projects = by_category(projects, category)
        if term:
            projects = search(projects, term)
        return ProjectView(projects)

    def sort(self, key=None):
        return ProjectView(sort_projects(self._projects, key))

    def page(self, limit=None, offset=None):
        return paginate(self._projects, limit, offset)

    def categories(self):
        return sorted(category_counts(self._projects))
