# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for DynamicList."""

import pytest

from genro_dynprops import DynamicList, DynamicProperties, JsonOptions, ParseMode

STRICT = JsonOptions(mode=ParseMode.STRICT_OBJECTS)


@pytest.fixture
def events():
    return []


@pytest.fixture
def items(events):
    sequence = DynamicList(['a', {'n': 1}, [1, 2]])
    sequence.subscribe(events.append)
    return sequence


class TestCreation:
    """Tests for list construction."""

    def test_converts_elements(self, items):
        """Test nested dicts and lists become containers."""
        assert items[0] == 'a'
        assert isinstance(items[1], DynamicProperties)
        assert isinstance(items[2], DynamicList)
        assert items[1].parent is items

    def test_skips_none(self):
        """Test None elements are skipped."""
        assert DynamicList([1, None, 2]).as_list() == [1, 2]

    def test_strict_keeps_objects_only(self):
        """Test strict mode drops non-object elements."""
        sequence = DynamicList([{'a': 1}, 'x', 2, {'b': 2}], options=STRICT)
        assert sequence.as_list() == [{'a': 1}, {'b': 2}]

    def test_bad_source_raises(self):
        """Test unsupported sources are refused."""
        with pytest.raises(TypeError):
            DynamicList('abc')


class TestAccess:
    """Tests for element access."""

    def test_get_out_of_range_is_none(self, items):
        """Test get never raises."""
        assert items.get(10) is None
        assert items.get(-10, 'd') == 'd'
        assert items.get('x') is None

    def test_negative_index(self, items):
        """Test negative indexes count from the end."""
        assert items[-3] == 'a'

    def test_index_error(self, items):
        """Test subscript raises IndexError out of range."""
        with pytest.raises(IndexError):
            items[3]

    def test_slice_returns_plain_list(self, items):
        """Test slices return a plain list of elements."""
        assert items[0:1] == ['a']


class TestMutation:
    """Tests for list mutations and their events."""

    def test_append(self, items, events):
        """Test append raises item[index] and document."""
        items.append('z')
        assert [e.name for e in events] == ['item[3]', 'document']
        assert events[0].kind == 'insert'
        assert events[0].key == 3

    def test_insert_clamps(self, items, events):
        """Test insert beyond the end appends."""
        items.insert(99, 'z')
        assert items[-1] == 'z'
        assert events[0].key == 3

    def test_replace(self, items, events):
        """Test replacing an element."""
        items[0] = 'b'
        assert events[0].kind == 'update'
        assert events[0].old == 'a'

    def test_replace_equal_is_silent(self, items, events):
        """Test replacing with an equal scalar notifies nobody."""
        items[0] = 'a'
        items[1] = items[1]
        assert events == []

    def test_delete(self, items, events):
        """Test deleting an element detaches it."""
        removed = items[1]
        del items[1]
        assert len(items) == 2
        assert removed.parent is None
        assert events[0].kind == 'delete'

    def test_reverse_keeps_elements(self):
        """Test reverse moves the same containers, without copies."""
        sequence = DynamicList([{'n': 1}, {'n': 2}, {'n': 3}])
        first, middle, last = sequence[0], sequence[1], sequence[2]
        sequence.reverse()
        assert sequence[0] is last
        assert sequence[1] is middle
        assert sequence[2] is first
        assert all(element.parent is sequence for element in sequence)

    def test_swap_keeps_elements(self):
        """Test swapping two containers keeps both and their parent."""
        sequence = DynamicList([{'n': 1}, {'n': 2}])
        first, second = sequence[0], sequence[1]
        sequence[0], sequence[1] = sequence[1], sequence[0]
        assert sequence[0] is second
        assert sequence[1] is first
        assert first.parent is sequence
        assert second.parent is sequence
        assert sequence.as_list() == [{'n': 2}, {'n': 1}]

    def test_container_from_elsewhere_is_copied(self):
        """Test a container owned by another list is still copied."""
        source = DynamicList([{'n': 1}])
        target = DynamicList([{'n': 0}])
        target[0] = source[0]
        assert target[0] is not source[0]
        assert source[0].parent is source

    def test_none_refused(self, items):
        """Test None cannot be stored."""
        with pytest.raises(TypeError):
            items.append(None)

    def test_strict_refuses_scalars(self):
        """Test strict mode refuses non-object elements."""
        sequence = DynamicList([], options=STRICT)
        sequence.append({'a': 1})
        with pytest.raises(TypeError):
            sequence.append(1)

    def test_clear(self, items, events):
        """Test clear raises item and document once."""
        items.clear()
        assert len(items) == 0
        assert [e.name for e in events] == ['item', 'document']

    def test_extend_and_pop(self, items):
        """Test MutableSequence mixin methods."""
        items.extend([1, 2])
        assert items.pop() == 2
        assert len(items) == 4


class TestConversion:
    """Tests for conversion helpers."""

    def test_as_list(self, items):
        """Test plain conversion."""
        assert items.as_list() == ['a', {'n': 1}, [1, 2]]

    def test_copy_and_equals(self, items):
        """Test copies are deep and equal."""
        copied = items.copy()
        assert copied.equals(items)
        copied[1].set('n', 2)
        assert not copied.equals(items)
