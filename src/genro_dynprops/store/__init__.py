# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - Observable document tree nodes.

This package provides the container nodes of a document tree built from
JSON: DynamicProperties (objects) and DynamicList (arrays), both with
synchronous change notification.

The package is organized into:
- core: DynamicProperties with key/path access, iteration and JSON
- sequence: DynamicList, the observable array node
- subscription: Event subscription and notification primitives
- values: Conversion and ownership of assigned values

Example:
    >>> from genro_dynprops import DynamicProperties
    >>> props = DynamicProperties()
    >>> props.set_path('config.name', 'MyApp')
    True
    >>> props['config.name']
    'MyApp'
"""

from .core import DynamicProperties, StoreView
from .sequence import DynamicList
from .subscription import ChangeEvent, SubscriberCallback, SubscriptionMixin

__all__ = [
    "DynamicProperties",
    "DynamicList",
    "StoreView",
    "ChangeEvent",
    "SubscriberCallback",
    "SubscriptionMixin",
]
