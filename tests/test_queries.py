"""
Query Layer Tests
=================

Filtering, sorting and pagination are pure functions over a project list.
"""

from foliocms.core.queries import (
    ProjectView, by_category, category_counts, paginate, search, sort_projects,
)

from conftest import make_project


def _projects():
    return [
        {'id': 'a', **make_project('Portfolio Site', desc='My personal website', category='basicweb')},
        {'id': 'b', **make_project('Chat App', desc='Realtime chat built on the MERN stack', category='mern')},
        {'id': 'c', **make_project('Notes', desc='Android notes with a PORTFOLIO widget', category='android')},
        {'id': 'd', **make_project('blog engine', desc='A php blog engine for LAMP hosts', category='lamp')},
        {'id': 'e', **make_project('Admin Panel', desc='Dashboard for the portfolio CMS', category='mern')},
    ]


def test_by_category_keeps_relative_order():
    result = by_category(_projects(), 'mern')
    assert [p['id'] for p in result] == ['b', 'e']
    assert all(p['category'] == 'mern' for p in result)


def test_by_category_is_exact():
    assert by_category(_projects(), 'MERN') == []
    assert by_category(_projects(), 'mer') == []


def test_search_is_case_insensitive_on_name_or_desc():
    result = search(_projects(), 'portfolio')
    assert [p['id'] for p in result] == ['a', 'c', 'e']
    for p in result:
        assert 'portfolio' in (p['name'] + ' ' + p['desc']).lower()


def test_search_with_no_match():
    assert search(_projects(), 'kotlin multiplatform') == []


def test_sort_by_name_is_case_insensitive():
    result = sort_projects(_projects(), 'name')
    assert [p['name'] for p in result] == ['Admin Panel', 'blog engine', 'Chat App', 'Notes', 'Portfolio Site']


def test_sort_by_name_desc():
    result = sort_projects(_projects(), 'name-desc')
    assert [p['id'] for p in result] == ['a', 'c', 'b', 'd', 'e']


def test_sort_by_category_with_name_tiebreak():
    result = sort_projects(_projects(), 'category')
    assert [p['id'] for p in result] == ['c', 'a', 'd', 'e', 'b']


def test_unknown_sort_key_keeps_input_order():
    projects = _projects()
    assert sort_projects(projects, None) == projects
    assert sort_projects(projects, 'newest') == projects


def test_sort_is_stable_for_equal_keys():
    projects = [
        {'id': '1', 'name': 'Same', 'category': 'mern'},
        {'id': '2', 'name': 'same', 'category': 'mern'},
        {'id': '3', 'name': 'SAME', 'category': 'mern'},
    ]
    assert [p['id'] for p in sort_projects(projects, 'name')] == ['1', '2', '3']
    assert [p['id'] for p in sort_projects(projects, 'category')] == ['1', '2', '3']


def test_paginate_last_partial_page():
    records = [{'id': str(i)} for i in range(25)]

    page = paginate(records, limit=10, offset=20)

    assert len(page.items) == 5
    assert page.total == 25
    assert page.has_more is False


def test_paginate_first_page():
    records = [{'id': str(i)} for i in range(25)]

    page = paginate(records, limit=10, offset=0)

    assert [r['id'] for r in page.items] == [str(i) for i in range(10)]
    assert page.has_more is True


def test_paginate_without_limit_returns_everything():
    records = [{'id': str(i)} for i in range(3)]
    page = paginate(records)
    assert page.items == records
    assert page.has_more is False


def test_paginate_offset_past_end():
    page = paginate([{'id': '1'}], limit=10, offset=5)
    assert page.items == []
    assert page.has_more is False


def test_category_counts():
    assert category_counts(_projects()) == {'basicweb': 1, 'mern': 2, 'android': 1, 'lamp': 1}


def test_project_view_chain_does_not_mutate_source():
    source = _projects()
    snapshot = [dict(p) for p in source]

    page = ProjectView(source).filter(category='mern', term='portfolio').sort('name').page(10, 0)

    assert [p['id'] for p in page.items] == ['e']
    assert source == snapshot


def test_project_view_categories():
    assert ProjectView(_projects()).categories() == ['android', 'basicweb', 'lamp', 'mern']
