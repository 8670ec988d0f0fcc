"""
Registry of tunable scalars.

Python has no mutable references to floats, so a registered scalar is
bound to an ``(owner, attribute)`` pair. Reads and writes through the
registry go straight to the owner's attribute and take effect at once.
"""
import logging

import yaml

LOGGER = logging.getLogger(__name__)


class ScalarRegister:
    """Named live bindings to scalar attributes of one type."""

    def __init__(self, kind):
        self.kind = kind
        self._bindings = {}

    def register_scalar(self, key, owner, attr):
        if key in self._bindings:
            raise KeyError(f"property '{key}' is already registered")
        if not hasattr(owner, attr):
            raise AttributeError(f"{type(owner).__name__} has no attribute '{attr}'")
        self._bindings[key] = (owner, attr)

    def get(self, key):
        owner, attr = self._bindings[key]
        return getattr(owner, attr)

    def set(self, key, value):
        owner, attr = self._bindings[key]
        setattr(owner, attr, self.kind(value))

    def keys(self):
        return list(self._bindings)

    def __contains__(self, key):
        return key in self._bindings

    def __len__(self):
        return len(self._bindings)


class PropertyHandler:
    """
    Registers of float and bool properties.

    Usage:
        handler = PropertyHandler()
        chain.register_to_property_handler(handler, 'MahalTh')
        handler.update_from_dict({'MahalTh0': 9.0})
    """

    def __init__(self):
        self.double_register = ScalarRegister(float)
        self.bool_register = ScalarRegister(bool)

    @property
    def registers(self):
        return (self.double_register, self.bool_register)

    def _register_for(self, key):
        for register in self.registers:
            if key in register:
                return register
        raise KeyError(f"unknown property '{key}'")

    def get(self, key):
        return self._register_for(key).get(key)

    def set(self, key, value):
        self._register_for(key).set(key, value)

    def update_from_dict(self, values, strict=False):
        """
        Assign registered properties from a flat mapping.

        Parameters
        ----------
        values : dict
            Property key to value
        strict : bool
            Raise KeyError on unknown keys instead of skipping them

        Returns
        -------
        list of str
            Keys that were applied
        """
        applied = []
        for key, value in values.items():
            try:
                register = self._register_for(key)
            except KeyError:
                if strict:
                    raise
                LOGGER.warning(f"Ignoring unknown property '{key}'")
                continue
            register.set(key, value)
            applied.append(key)
        return applied

    def load_yaml(self, path, strict=False):
        """Read a flat YAML mapping of property values and apply it."""
        with open(path) as handle:
            values = yaml.safe_load(handle) or {}
        return self.update_from_dict(values, strict=strict)
