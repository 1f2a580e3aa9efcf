import logging

import pytest

from sqlengines import (
    BUILTIN_ENGINES,
    ConfigurationError,
    CustomEngineEntry,
    EngineConfiguration,
    EngineDescriptor,
    EngineRegistry,
    EngineOverrides,
)


class AcmeEngine(EngineDescriptor):
    default_invariant_name = "Acme.Data.Client"
    default_parameter_prefix = "$"


def test_new_registry_is_empty():
    assert len(EngineRegistry()) == 0


def test_register_same_reference_is_idempotent():
    registry = EngineRegistry()
    engine = EngineDescriptor("X")
    for _ in range(5):
        registry.register(engine)
    assert len(registry) == 1


def test_register_keeps_equal_but_distinct_descriptors():
    registry = EngineRegistry()
    registry.register(EngineDescriptor("X"))
    registry.register(EngineDescriptor("X"))
    assert len(registry) == 2


def test_register_none_raises():
    with pytest.raises(TypeError):
        EngineRegistry().register(None)
    with pytest.raises(TypeError):
        EngineRegistry().remove(None)


def test_remove_by_identity():
    registry = EngineRegistry()
    first = EngineDescriptor("X")
    twin = EngineDescriptor("X")
    registry.register(first)
    assert registry.remove(twin) is False
    assert registry.remove(first) is True
    assert registry.remove(first) is False
    assert len(registry) == 0


def test_list_all_preserves_order_and_is_a_snapshot():
    registry = EngineRegistry()
    a, b = EngineDescriptor("A"), EngineDescriptor("B")
    registry.register(a)
    registry.register(b)
    snapshot = registry.list_all()
    registry.register(EngineDescriptor("C"))
    registry.remove(a)
    assert snapshot == (a, b)
    assert [engine.invariant_name for engine in registry] == ["B", "C"]


def test_contains_uses_identity():
    registry = EngineRegistry()
    engine = EngineDescriptor("X")
    registry.register(engine)
    assert engine in registry
    assert EngineDescriptor("X") not in registry


def test_clear_empties_registry():
    registry = EngineRegistry()
    registry.initialize()
    registry.clear_engines()
    assert registry.list_all() == ()


def test_initialize_registers_builtins_once():
    registry = EngineRegistry()
    assert registry.initialize() is True
    assert [type(engine) for engine in registry] == list(BUILTIN_ENGINES)
    assert registry.initialize() is False
    assert len(registry) == len(BUILTIN_ENGINES)


def test_initialize_skips_non_empty_registry():
    registry = EngineRegistry()
    engine = EngineDescriptor("Only.One")
    registry.register(engine)
    assert registry.initialize() is False
    assert registry.list_all() == (engine,)


def test_initialize_after_clear_repopulates():
    registry = EngineRegistry()
    registry.initialize()
    registry.clear()
    assert registry.initialize() is True
    assert len(registry) == len(BUILTIN_ENGINES)


def test_initialize_adds_custom_engines_last():
    config = EngineConfiguration(
        custom_engines=[
            CustomEngineEntry(
                id="acme",
                type_path=f"{__name__}:AcmeEngine",
                overrides=EngineOverrides(server_version="3.1"),
            )
        ]
    )
    registry = EngineRegistry(config)
    registry.initialize()
    custom = registry.list_all()[-1]
    assert isinstance(custom, AcmeEngine)
    assert custom.server_version == "3.1"
    assert custom.parameter_prefix == "$"


def test_initialize_with_bad_custom_engine_leaves_registry_empty():
    config = EngineConfiguration(
        custom_engines=[CustomEngineEntry(id="missing", type_path="no_such_module.Engine")]
    )
    registry = EngineRegistry(config)
    with pytest.raises(ConfigurationError):
        registry.initialize()
    assert len(registry) == 0


def test_initialize_applies_relax_transformers_setting():
    registry = EngineRegistry()
    registry.initialize(EngineConfiguration(relax_transformers=False))
    assert all(engine.relax_transformers is False for engine in registry)


def test_initialize_logs_engine_count(caplog):
    registry = EngineRegistry()
    caplog.set_level(logging.INFO, logger=registry.logger.name)
    registry.initialize()
    messages = [record.getMessage() for record in caplog.records if record.name == registry.logger.name]
    assert any("initialized with 8 engines" in message for message in messages)


def test_initialize_on_populated_registry_keeps_configuration():
    registry = EngineRegistry()
    assert registry.initialize() is True
    before = registry.config

    assert registry.initialize(EngineConfiguration(default_entry="other")) is False
    assert registry.config is before
    assert registry.config.default_entry is None


def test_initialize_after_clear_applies_new_configuration():
    registry = EngineRegistry()
    registry.initialize()
    registry.clear()
    config = EngineConfiguration(default_entry="other")
    assert registry.initialize(config) is True
    assert registry.config is config
