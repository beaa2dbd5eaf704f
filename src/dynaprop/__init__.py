"""dynaprop: typed accessors over a process-wide dynamic configuration store."""

from importlib.metadata import version as _version

__version__ = _version("dynaprop")

from dynaprop.dynamic_property import (
    DynamicProperty,
    set_property,
    clear_property,
    update_properties,
    property_names,
)
from dynaprop.property_wrapper import PropertyWrapper
from dynaprop.properties import (
    DynamicIntProperty,
    DynamicLongProperty,
    DynamicFloatProperty,
    DynamicDoubleProperty,
    DynamicBooleanProperty,
    DynamicStringProperty,
)
from dynaprop.registry import register_subclass_with_no_callback, is_registered
# textual NOT auto-imported: opt-in only

__all__ = [
    "DynamicProperty",
    "set_property",
    "clear_property",
    "update_properties",
    "property_names",
    "PropertyWrapper",
    "DynamicIntProperty",
    "DynamicLongProperty",
    "DynamicFloatProperty",
    "DynamicDoubleProperty",
    "DynamicBooleanProperty",
    "DynamicStringProperty",
    "register_subclass_with_no_callback",
    "is_registered",
]
