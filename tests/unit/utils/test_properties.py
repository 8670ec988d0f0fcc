"""Unit tests for the property registry."""

import pytest

from manifold_ekf.utils import PropertyHandler, ScalarRegister


class Tunable:
    def __init__(self):
        self.gain = 1.0
        self.iterations = 3
        self.active = False


class TestScalarRegister:
    """Tests for live scalar bindings."""

    def test_live_binding(self):
        """Reads and writes should go through to the owner."""
        owner = Tunable()
        register = ScalarRegister(float)
        register.register_scalar('gain', owner, 'gain')

        register.set('gain', 2.5)
        assert owner.gain == 2.5
        owner.gain = 4.0
        assert register.get('gain') == 4.0

    def test_duplicate_key(self):
        """Registering a key twice should raise KeyError."""
        owner = Tunable()
        register = ScalarRegister(float)
        register.register_scalar('gain', owner, 'gain')
        with pytest.raises(KeyError):
            register.register_scalar('gain', owner, 'gain')

    def test_missing_attribute(self):
        """Binding to a missing attribute should raise."""
        with pytest.raises(AttributeError):
            ScalarRegister(float).register_scalar('x', Tunable(), 'missing')

    def test_value_coerced(self):
        """Values should be converted to the register's type."""
        owner = Tunable()
        register = ScalarRegister(int)
        register.register_scalar('iterations', owner, 'iterations')
        register.set('iterations', 7.0)
        assert owner.iterations == 7
        assert isinstance(owner.iterations, int)


class TestPropertyHandler:
    """Tests for the multi-type property handler."""

    @pytest.fixture
    def handler(self):
        owner = Tunable()
        handler = PropertyHandler()
        handler.double_register.register_scalar('gain', owner, 'gain')
        handler.bool_register.register_scalar('active', owner, 'active')
        handler.owner = owner
        return handler

    def test_dispatch_by_key(self, handler):
        """get/set should find the register holding the key."""
        handler.set('gain', 9)
        handler.set('active', True)
        assert handler.owner.gain == 9.0
        assert handler.get('active') is True

    def test_unknown_key(self, handler):
        """Unknown keys should raise KeyError on direct access."""
        with pytest.raises(KeyError):
            handler.get('missing')

    def test_update_from_dict_skips_unknown(self, handler):
        """Unknown keys should be skipped unless strict."""
        applied = handler.update_from_dict({'gain': 0.5, 'missing': 1.0})
        assert applied == ['gain']
        assert handler.owner.gain == 0.5

    def test_update_from_dict_strict(self, handler):
        """Strict mode should raise on unknown keys."""
        with pytest.raises(KeyError):
            handler.update_from_dict({'missing': 1.0}, strict=True)

    def test_load_yaml(self, handler, tmp_path):
        """Values should be read from a flat YAML mapping."""
        path = tmp_path / 'props.yaml'
        path.write_text('gain: 3.25\nactive: true\n')

        applied = handler.load_yaml(path)

        assert sorted(applied) == ['active', 'gain']
        assert handler.owner.gain == 3.25
        assert handler.owner.active is True

    def test_load_empty_yaml(self, handler, tmp_path):
        """An empty file should apply nothing."""
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        assert handler.load_yaml(path) == []
