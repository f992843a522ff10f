from types import SimpleNamespace

import pytest
from werkzeug.datastructures import MultiDict

from campus_events.errors import ValidationError
from campus_events.models.roles import Roles
from campus_events.services.patching import (PatchSpec, Field, TEXT, INTEGER, LIST, OBJECT,
                                             merge_object)

SPEC = PatchSpec('thing', {
    'title': Field(TEXT, required=True, label='Title'),
    'count': Field(INTEGER, label='Count'),
    'labels': Field(LIST),
    'settings': Field(OBJECT),
}, immutable=('key',))


def test_merge_object_recurses():
    base = {'a': 1, 'nested': {'x': 1, 'y': 2}}

    merged = merge_object(base, {'nested': {'y': 3}, 'b': 2})

    assert merged == {'a': 1, 'b': 2, 'nested': {'x': 1, 'y': 3}}
    assert base == {'a': 1, 'nested': {'x': 1, 'y': 2}}


def test_apply_by_field_kind():
    doc = SimpleNamespace(key='k1', title='Old', count=1, labels=['a', 'b'], settings={'x': 1})

    SPEC.apply(doc, {'key': 'k2', 'title': '  New ', 'count': '3', 'labels': ['c'],
                     'settings': {'y': 2}, 'unknown': True})

    assert doc.key == 'k1'
    assert doc.title == 'New'
    assert doc.count == 3
    assert doc.labels == ['c']
    assert doc.settings == {'x': 1, 'y': 2}
    assert not hasattr(doc, 'unknown')


def test_bad_integer():
    doc = SimpleNamespace(title='t', count=None, labels=[], settings={})

    with pytest.raises(ValidationError, match='Count'):
        SPEC.apply(doc, {'count': 'many'})


def test_check_required():
    with pytest.raises(ValidationError, match='Title is required'):
        SPEC.check_required(SimpleNamespace(title=''))


def test_from_form_collects_lists():
    form = MultiDict([('labels', 'a'), ('labels', 'b'), ('title', 'T'), ('key', 'x')])

    assert SPEC.from_form(form) == {'labels': ['a', 'b'], 'title': 'T'}
    assert SPEC.from_form(form, only=('title',)) == {'title': 'T'}


def test_roles_grant_any_of():
    roles = Roles.from_dict({'admin': 'true'})

    assert roles.names() == {'User', 'Admin'}
    assert roles.grants(['Superuser', 'Admin'])
    assert not roles.grants(['Superuser'])
    assert not roles.grants(['Owner'])
    assert not roles.grants([])


@pytest.mark.parametrize('value', [5, {'a': 1}, ['ok', 3], [['nested']]])
def test_list_rejects_non_text_lists(value):
    doc = SimpleNamespace(title='t', count=None, labels=['a'], settings={})

    with pytest.raises(ValidationError, match='labels must be a list'):
        SPEC.apply(doc, {'labels': value})


@pytest.mark.parametrize('value', [5, ['T'], {'t': 1}, True])
def test_text_rejects_non_strings(value):
    doc = SimpleNamespace(title='t', count=None, labels=[], settings={})

    with pytest.raises(ValidationError, match='Title must be text'):
        SPEC.apply(doc, {'title': value})


@pytest.mark.parametrize('value', [True, 2.5, [1]])
def test_integer_rejects_non_integers(value):
    doc = SimpleNamespace(title='t', count=None, labels=[], settings={})

    with pytest.raises(ValidationError, match='Count must be a whole number'):
        SPEC.apply(doc, {'count': value})
