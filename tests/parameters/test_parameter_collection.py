import datetime

import pytest

from sqlengines import ConfigurationError, OdbcEngine, OracleEngine, SqlServerEngine


def test_generated_names_use_engine_prefix():
    parameters = SqlServerEngine().create_parameter_collection()
    first = parameters.add(1)
    second = parameters.add("two")
    assert (first.name, second.name) == ("@0", "@1")
    assert parameters.placeholder(second) == "@1"


def test_generated_names_skip_taken_ones():
    parameters = SqlServerEngine().create_parameter_collection()
    parameters.add_named("@1", "taken")
    assert parameters.add("next").name == "@2"


def test_positional_engine_binds_list():
    parameters = OdbcEngine().create_parameter_collection()
    param = parameters.add(10)
    parameters.add(datetime.time(8, 15))
    assert parameters.placeholder(param) == "?"
    assert parameters.bind() == [10, "08:15:00"]


def test_named_engine_binds_dict():
    parameters = SqlServerEngine().create_parameter_collection()
    parameters.add("a")
    parameters.add_named("@name", "b")
    assert parameters.bind() == {"@0": "a", "@name": "b"}


def test_lookup_follows_engine_case_sensitivity():
    insensitive = SqlServerEngine().create_parameter_collection()
    insensitive.add_named("@Name", 1)
    assert insensitive.find("@NAME") is not None
    with pytest.raises(ConfigurationError):
        insensitive.add_named("@name", 2)

    sensitive = OracleEngine().create_parameter_collection()
    sensitive.add_named(":Name", 1)
    sensitive.add_named(":NAME", 2)
    assert len(sensitive) == 2


def test_empty_name_rejected():
    with pytest.raises(ConfigurationError):
        SqlServerEngine().create_parameter_collection().add_named("  ", 1)
