import typing

import pytest

from sqlengines import (
    ConfigurationError,
    EngineDescriptor,
    EngineOverrides,
    OracleEngine,
    SqlServerEngine,
)
from sqlengines.dialects import UNSET


def test_clone_without_overrides_duplicates_fields():
    source = SqlServerEngine(server_version="10.5")
    clone = source.clone()
    assert clone is not source
    assert type(clone) is SqlServerEngine
    assert clone.as_dict() == source.as_dict()


def test_clone_override_leaves_source_untouched():
    source = EngineDescriptor("Vendor.Driver.Sql")
    clone = source.clone({"case_sensitive_names": True})
    assert clone.case_sensitive_names is True
    assert source.case_sensitive_names is False
    assert clone.invariant_name == source.invariant_name


def test_clone_accepts_camel_case_names():
    clone = SqlServerEngine().clone({"caseSensitiveNames": True, "serverVersion": "12.0"})
    assert clone.case_sensitive_names is True
    assert clone.server_version == "12.0"


def test_clone_under_new_identity():
    source = OracleEngine()
    variant = source.clone({"invariant_name": "Oracle.ManagedDataAccess.Client"})
    assert variant.invariant_name == "Oracle.ManagedDataAccess.Client"
    assert source.invariant_name == "System.Data.OracleClient"
    assert variant.parameter_prefix == ":"


def test_clone_with_typed_overrides():
    clone = SqlServerEngine().clone(EngineOverrides(supports_native_skip_take=True))
    assert clone.supports_native_skip_take is True
    assert clone.parameter_prefix == "@"


def test_clone_can_reset_server_version():
    clone = SqlServerEngine(server_version="11.0").clone({"server_version": None})
    assert clone.server_version is None


def test_clone_rejects_wrong_type():
    source = EngineDescriptor("Vendor.Driver")
    with pytest.raises(ConfigurationError) as excinfo:
        source.clone({"positional_parameters": "yes"})
    assert excinfo.value.field == "positional_parameters"
    assert "positional_parameters" in str(excinfo.value)
    assert source.positional_parameters is False


def test_clone_rejects_unknown_field():
    with pytest.raises(ConfigurationError) as excinfo:
        SqlServerEngine().clone({"quoteCharacter": "["})
    assert excinfo.value.field == "quoteCharacter"


def test_clone_rejects_duplicate_spellings():
    with pytest.raises(ConfigurationError):
        SqlServerEngine().clone({"caseSensitiveNames": True, "case_sensitive_names": False})


def test_clone_is_all_or_nothing():
    source = SqlServerEngine()
    with pytest.raises(ConfigurationError):
        source.clone({"case_sensitive_names": True, "parameter_prefix": ""})
    assert source.case_sensitive_names is False
    assert source.parameter_prefix == "@"


def test_clone_copies_transformers_independently():
    source = SqlServerEngine()
    source.add_transformer(bytes, bytes.hex)
    clone = source.clone()
    assert clone.has_transformer(bytes)
    clone.remove_transformer(bytes)
    assert source.has_transformer(bytes)


def test_overrides_merge_later_wins():
    base = EngineOverrides(case_sensitive_names=True, parameter_prefix=":")
    merged = base.merged(EngineOverrides(parameter_prefix="@"))
    assert merged.items() == {"case_sensitive_names": True, "parameter_prefix": "@"}
    assert not EngineOverrides()


def test_override_fields_are_typed():
    hints = typing.get_type_hints(EngineOverrides)
    unset = type(UNSET)
    assert hints["invariant_name"] == typing.Union[str, unset]
    assert hints["server_version"] == typing.Union[str, None, unset]
    assert hints["case_sensitive_names"] == typing.Union[bool, unset]
    assert hints["parameter_prefix"] == typing.Union[str, unset]
    assert hints["positional_parameters"] == typing.Union[bool, unset]
    assert hints["supports_native_skip_take"] == typing.Union[bool, unset]
