# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Counter page - a console rendition of a data-bound form.

A page is described by a JSON document. Widgets are simulated by bindings
and views: a button click increments ``Count`` and rewrites ``Hello``,
a text entry edits the nested person name, a date/time picker edits
``Nested.Person.Birth``, and a JSON panel prints the document every time
anything changes.

Run with::

    python examples/counter_page/counter_page.py
"""

from __future__ import annotations

import logging
from datetime import time

from genro_dynprops import (
    DateTimeBinding,
    JsonView,
    NumericBinding,
    PathView,
    TextBinding,
    parse,
)

PAGE = """
{
    "Count": 0,
    "Hello": "Hello, World!",
    "Welcome": "Welcome to .NET Multi-platform App UI",
    "Nested": {"Person": {"Name": "Ann", "Birth": "1990-04-01T08:00:00"}},
    "Countries": [
        {"Name": "USA", "Population": 331000000},
        {"Name": "Italy", "Population": 59000000}
    ]
}
"""


def click(props):
    """Simulate the counter button."""
    d = props.dynamic
    d.Count += 1
    d.Hello = f"Clicked {d.Count} time" + ("" if d.Count == 1 else "s")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    props = parse(PAGE)

    panel = JsonView(props, live=True)
    panel.subscribe(lambda event: print(f"--- json ({event.root_origin.name})\n{panel.json}"))

    counter = NumericBinding(props, 'Count')
    counter.subscribe(lambda event: print(f"counter {event.name}: {event.new!r}"))

    person = PathView(props, 'Nested.Person')
    name = TextBinding(person.target, 'Name')
    birth = DateTimeBinding(person.target, 'Birth')
    birth.subscribe(lambda event: print(f"birth {event.name}: {event.new}"))

    click(props)
    click(props)
    name.text = "Ann Smith"
    birth.time_part = time(21, 15)
    counter.text = "40"
    props['Countries[1].Population'] = 59100000

    print(f"Person: {person['Name']}, born {birth.date_part} at {birth.time_part}")


if __name__ == "__main__":
    main()
