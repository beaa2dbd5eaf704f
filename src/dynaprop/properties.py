"""Built-in typed property variants.

These only read; none overrides property_changed(), so all of them are
registered as no-callback classes when this module loads. Extend one and
override property_changed() to react to updates.

Usage:
    timeout = DynamicIntProperty("http.timeout.ms", 30)
    timeout.get()   # 30 until someone sets "http.timeout.ms"
"""

from __future__ import annotations

from dynaprop import registry
from dynaprop.property_wrapper import PropertyWrapper


class DynamicIntProperty(PropertyWrapper[int]):
    def get(self) -> int:
        return self.prop.get_integer(self._default_value)

    def get_value(self) -> int:
        return self.get()


class DynamicLongProperty(PropertyWrapper[int]):
    def get(self) -> int:
        return self.prop.get_long(self._default_value)

    def get_value(self) -> int:
        return self.get()


class DynamicFloatProperty(PropertyWrapper[float]):
    def get(self) -> float:
        return self.prop.get_float(self._default_value)

    def get_value(self) -> float:
        return self.get()


class DynamicDoubleProperty(PropertyWrapper[float]):
    def get(self) -> float:
        return self.prop.get_double(self._default_value)

    def get_value(self) -> float:
        return self.get()


class DynamicBooleanProperty(PropertyWrapper[bool]):
    def get(self) -> bool:
        return self.prop.get_boolean(self._default_value)

    def get_value(self) -> bool:
        return self.get()


class DynamicStringProperty(PropertyWrapper[str]):
    def get(self) -> str:
        return self.prop.get_string(self._default_value)

    def get_value(self) -> str:
        return self.get()


BUILTIN_VARIANTS = (
    DynamicIntProperty,
    DynamicStringProperty,
    DynamicBooleanProperty,
    DynamicFloatProperty,
    DynamicLongProperty,
    DynamicDoubleProperty,
)

registry.initialize(BUILTIN_VARIANTS)
