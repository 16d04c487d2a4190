# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for JsonView and PathView."""

import json

import pytest

from genro_dynprops import DynamicProperties, JsonView, PathView, parse


@pytest.fixture
def props():
    return parse('{"count": 0, "person": {"name": "Ann"}, "rows": [{"n": 1}]}')


class TestJsonView:
    """Tests for JsonView."""

    def test_json_is_pulled(self, props):
        """Test json reflects the current tree."""
        view = JsonView(props)
        props.set('count', 3)
        assert json.loads(view.json)['count'] == 3

    def test_one_event_per_change(self, props):
        """Test each change anywhere raises exactly one json event."""
        view = JsonView(props)
        events = []
        view.subscribe(events.append)
        props.set('count', 1)
        props.set_path('person.name', 'Bob')
        props['rows[0].n'] = 2
        props.get('rows').append({'n': 3})
        assert [e.name for e in events] == ['json'] * 4
        assert events[1].origin.source is props.get('person')
        assert events[1].root_origin.key == 'name'

    def test_no_event_without_change(self, props):
        """Test a no-op set raises nothing."""
        view = JsonView(props)
        events = []
        view.subscribe(events.append)
        props.set('count', 0)
        assert events == []

    def test_static_snapshot(self, props):
        """Test containers inserted later are not watched by default."""
        view = JsonView(props)
        events = []
        view.subscribe(events.append)
        props.set('extra', {'x': 1})
        props.set_path('extra.x', 2)
        assert len(events) == 1
        assert not view.is_watching(props.get('extra'))

    def test_reordered_elements_stay_watched(self):
        """Test a static view keeps seeing elements moved within a list."""
        props = parse('{"items": [{"n": 1}, {"n": 2}]}')
        view = JsonView(props)
        props.get('items').reverse()
        events = []
        view.subscribe(events.append)
        props.get('items')[0].set('n', 99)
        assert len(events) == 1
        assert json.loads(view.json) == {'items': [{'n': 99}, {'n': 1}]}

    def test_live_view_keeps_reordered_elements(self):
        """Test a live view keeps watching elements swapped within a list."""
        props = parse('{"items": [{"n": 1}, {"n": 2}, {"n": 3}]}')
        view = JsonView(props, live=True)
        items = props.get('items')
        items.reverse()
        assert all(view.is_watching(element) for element in items)
        assert view.watching == 5
        events = []
        view.subscribe(events.append)
        items[0].set('n', 30)
        items[2].set('n', 10)
        assert len(events) == 2

    def test_rewire(self, props):
        """Test rewire attaches to the current tree."""
        view = JsonView(props)
        props.set('extra', {'x': 1})
        view.rewire()
        events = []
        view.subscribe(events.append)
        props.set_path('extra.x', 2)
        assert len(events) == 1

    def test_live(self, props):
        """Test live views follow inserted and removed containers."""
        view = JsonView(props, live=True)
        events = []
        view.subscribe(events.append)
        props.set('extra', {'x': {'y': 1}})
        props.set_path('extra.x.y', 2)
        assert len(events) == 2
        extra = props.get('extra')
        props.remove('extra')
        assert not view.is_watching(extra)
        extra.set('x', 0)
        assert len(events) == 3

    def test_live_clear_prunes(self, props):
        """Test clear detaches the removed containers."""
        view = JsonView(props, live=True)
        assert view.watching == 4
        props.clear()
        assert view.watching == 1

    def test_watching(self, props):
        """Test every object and array is attached."""
        view = JsonView(props)
        assert view.watching == 4
        view.close()
        assert view.watching == 0
        assert props.subscribers == []


class TestPathView:
    """Tests for PathView."""

    def test_read_write(self, props):
        """Test keyed access to the resolved object."""
        person = PathView(props, 'person')
        assert person.target is props.get('person')
        assert person['name'] == 'Ann'
        person['name'] = 'Bob'
        assert props['person.name'] == 'Bob'
        assert 'name' in person

    def test_empty_key(self, props):
        """Test an empty key reads None and writes nothing."""
        person = PathView(props, 'person')
        assert person[''] is None
        person[''] = 'x'
        assert props.get('person').as_dict() == {'name': 'Ann'}

    def test_unresolved_path_targets_deepest_object(self, props):
        """Test a missing path falls back to the deepest object reached."""
        view = PathView(props, 'person.missing.deeper')
        assert view.target is props.get('person')

    def test_path_to_scalar_targets_holder(self, props):
        """Test a path to a scalar targets the object holding it."""
        assert PathView(props, 'person.name').target is props.get('person')

    def test_reraises_item_events(self, props):
        """Test item events are re-raised, document events are not."""
        person = PathView(props, 'person')
        events = []
        person.subscribe(events.append)
        props.set_path('person.name', 'Bob')
        assert [e.name for e in events] == ['item[name]']
        assert events[0].source is person
        assert events[0].origin.source is props.get('person')

    def test_resolved_once(self, props):
        """Test the view keeps its target when the path is re-pointed."""
        person = PathView(props, 'person')
        old_target = person.target
        props.set('person', {'name': 'Eve'})
        assert person.target is old_target
        assert person['name'] == 'Ann'

    def test_close(self, props):
        """Test close stops re-raising."""
        person = PathView(props, 'person')
        events = []
        person.subscribe(events.append)
        person.close()
        props.set_path('person.name', 'Bob')
        assert events == []


class TestMirroredViews:
    """Tests for two consumers bound to one store."""

    def test_change_visible_to_both(self):
        """Test a change through one view is seen by the other."""
        props = DynamicProperties({'person': {'name': 'Ann'}})
        first = PathView(props, 'person')
        second = PathView(props, 'person')
        seen = []
        second.subscribe(lambda event: seen.append(second['name']))
        first['name'] = 'Bob'
        assert seen == ['Bob']
