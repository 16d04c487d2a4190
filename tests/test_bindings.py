# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for TextBinding, NumericBinding and DateTimeBinding."""

from datetime import date, datetime, time

import pytest

from genro_dynprops import (
    DateTimeBinding,
    DynamicProperties,
    NumericBinding,
    TextBinding,
)

TODAY = date(2024, 1, 2)


def names(events):
    return [event.name for event in events]


@pytest.fixture
def props():
    return DynamicProperties({'Hello': 'Hi', 'Count': 1})


class TestTextBinding:
    """Tests for TextBinding."""

    def test_text_reads_value(self, props):
        """Test text mirrors the stored string."""
        binding = TextBinding(props, 'Hello')
        assert binding.text == 'Hi'
        assert TextBinding(props, 'Missing').text == ''

    def test_text_writes_value(self, props):
        """Test writing text stores it and raises value and text."""
        binding = TextBinding(props, 'Hello')
        events = []
        binding.subscribe(events.append)
        binding.text = 'Hey'
        assert props.get('Hello') == 'Hey'
        assert names(events) == ['value', 'text']

    def test_empty_text_is_absence(self, props):
        """Test empty text removes the key."""
        binding = TextBinding(props, 'Hello')
        binding.text = ''
        assert not props.has('Hello')

    def test_store_change_reaches_binding(self, props):
        """Test a store change raises the binding events with an origin."""
        binding = TextBinding(props, 'Hello')
        events = []
        binding.subscribe(events.append)
        props.set('Hello', 'Yo')
        assert names(events) == ['value', 'text']
        assert events[1].new == 'Yo'
        assert events[0].origin.name == 'item[Hello]'

    def test_other_keys_ignored(self, props):
        """Test changes to other keys are ignored."""
        binding = TextBinding(props, 'Hello')
        events = []
        binding.subscribe(events.append)
        props.set('Count', 2)
        assert events == []

    def test_clear_reaches_binding(self, props):
        """Test clearing the store is a change of the key."""
        binding = TextBinding(props, 'Hello')
        events = []
        binding.subscribe(events.append)
        props.clear()
        assert names(events) == ['value', 'text']
        assert binding.text == ''

    @pytest.mark.parametrize('cls', [TextBinding, NumericBinding, DateTimeBinding])
    def test_slots(self, props, cls):
        """Test bindings declare slots and carry no instance dict."""
        binding = cls(props, 'Hello')
        assert not hasattr(binding, '__dict__')
        with pytest.raises(AttributeError):
            binding.unknown = 1

    def test_close(self, props):
        """Test a closed binding stops listening."""
        binding = TextBinding(props, 'Hello')
        binding.close()
        assert props.subscribers == []


class TestNumericBinding:
    """Tests for NumericBinding."""

    def test_initial_text(self, props):
        """Test text starts from the stored number."""
        assert NumericBinding(props, 'Count').text == '1'
        assert NumericBinding(props, 'Missing').text == ''

    def test_int_then_float(self, props):
        """Test text parses as int, then float."""
        binding = NumericBinding(props, 'Count')
        binding.text = '42'
        assert props.get('Count') == 42
        assert type(props.get('Count')) is int
        binding.text = '4.5'
        assert props.get('Count') == 4.5

    def test_unparsable_keeps_text(self, props):
        """Test unparsable text stores absence but stays as typed."""
        binding = NumericBinding(props, 'Count')
        binding.text = '4x'
        assert not props.has('Count')
        assert binding.text == '4x'

    def test_text_events(self, props):
        """Test typing raises text, and value when the number changes."""
        binding = NumericBinding(props, 'Count')
        events = []
        binding.subscribe(events.append)
        binding.text = '2'
        binding.text = '2.'
        assert names(events) == ['text', 'value', 'text', 'value']
        binding.text = '2.'
        assert len(events) == 4

    def test_value_updates_text(self, props):
        """Test a store change reformats the text."""
        binding = NumericBinding(props, 'Count')
        props.set('Count', 7.25)
        assert binding.text == '7.25'
        binding.value = None
        assert binding.text == ''

    def test_typing_does_not_reformat(self, props):
        """Test the binding's own write does not rewrite the typed text."""
        binding = NumericBinding(props, 'Count')
        binding.text = '007'
        assert props.get('Count') == 7
        assert binding.text == '007'


class TestDateTimeBinding:
    """Tests for DateTimeBinding."""

    @pytest.fixture
    def binding(self, props):
        return DateTimeBinding(props, 'When', today=lambda: TODAY)

    def test_absent(self, binding):
        """Test an absent value."""
        assert binding.value is None
        assert binding.date_part is None
        assert binding.time_part == time(0)

    def test_value_stored_as_iso(self, props, binding):
        """Test the datetime is stored as ISO-8601 text."""
        binding.value = datetime(2023, 5, 6, 7, 8, 9)
        assert props.get('When') == '2023-05-06T07:08:09'
        assert binding.date_part == date(2023, 5, 6)
        assert binding.time_part == time(7, 8, 9)

    def test_time_without_value_uses_today(self, props, binding):
        """Test setting a time with no value combines it with today."""
        binding.time_part = time(9, 30)
        assert props.get('When') == '2024-01-02T09:30:00'

    def test_time_keeps_date(self, binding):
        """Test setting the time keeps the date."""
        binding.value = datetime(2023, 5, 6, 7, 0)
        binding.time_part = time(18, 45)
        assert binding.value == datetime(2023, 5, 6, 18, 45)

    def test_date_keeps_time(self, binding):
        """Test setting the date keeps the time."""
        binding.value = datetime(2023, 5, 6, 7, 0)
        binding.date_part = date(2025, 12, 31)
        assert binding.value == datetime(2025, 12, 31, 7, 0)
        binding.date_part = None
        assert binding.value is None

    def test_one_value_and_one_time_event(self, binding):
        """Test each change raises exactly one value and one time_part event."""
        events = []
        binding.subscribe(events.append)
        binding.time_part = time(9, 30)
        assert names(events) == ['value', 'time_part']
        binding.date_part = date(2024, 2, 3)
        assert names(events) == ['value', 'time_part'] * 2

    def test_store_change_raises_pair(self, props, binding):
        """Test a change made on the store raises one pair."""
        events = []
        binding.subscribe(events.append)
        props.set('When', '2020-01-01T10:00:00')
        assert names(events) == ['value', 'time_part']
        assert events[1].new == time(10, 0)

    def test_convergence(self, binding):
        """Test a subscriber writing the parts back settles without loops."""
        events = []

        def echo(event):
            events.append(event.name)
            if event.name == 'time_part':
                binding.time_part = event.new
                binding.date_part = binding.date_part

        binding.subscribe(echo)
        binding.value = datetime(2024, 3, 4, 5, 6)
        assert events == ['value', 'time_part']
        assert binding.value == datetime(2024, 3, 4, 5, 6)

    def test_two_bindings_on_one_key(self, props):
        """Test two bindings on the same key stay in step."""
        first = DateTimeBinding(props, 'When', today=lambda: TODAY)
        second = DateTimeBinding(props, 'When', today=lambda: TODAY)
        events = []
        second.subscribe(events.append)
        first.time_part = time(8, 0)
        assert second.value == datetime(2024, 1, 2, 8, 0)
        assert names(events) == ['value', 'time_part']

    def test_unreadable_text(self, props, binding):
        """Test text that is not ISO-8601 reads as no value."""
        props.set('When', 'yesterday')
        assert binding.value is None

    def test_wrong_type_raises(self, binding):
        """Test only datetimes are accepted."""
        with pytest.raises(TypeError):
            binding.value = date(2024, 1, 1)
