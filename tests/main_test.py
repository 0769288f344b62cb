#!/usr/bin/env python3
"""
Tests for the main CLI script.
"""
import json
import pytest
import tempfile
from pathlib import Path
from unittest import mock

# autopep8: off
from utils import setup
setup()
from schema_rules.cli import load_json, load_sub_schemas, main, parse_args
# autopep8: on


@pytest.fixture
def valid_schema():
    """Create a valid schema for testing."""
    return {
        "title": "Test Schema",
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "integer", "minimum": 0},
            "address": {"$ref": "common.json#/definitions/address"}
        },
        "required": ["name"],
        "additionalProperties": False
    }


@pytest.fixture
def common_schema():
    """Create a sub-schema for testing."""
    return {
        "definitions": {
            "address": {
                "type": "object",
                "properties": {"city": {"type": "string"}},
                "required": ["city"]
            }
        }
    }


@pytest.fixture
def valid_data():
    """Create valid data for testing."""
    return {
        "name": "John Doe",
        "age": 30,
        "address": {"city": "Springfield"}
    }


@pytest.fixture
def invalid_data():
    """Create invalid data for testing."""
    return {
        "name": 123,  # Wrong type
        "age": -5     # Below minimum
    }


@pytest.fixture
def temp_files(valid_schema, common_schema, valid_data, invalid_data):
    """Create temporary files for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_dir_path = Path(temp_dir)

        files = {
            "schema_file": valid_schema,
            "common_file": common_schema,
            "valid_data_file": valid_data,
            "invalid_data_file": invalid_data,
            "string_data_file": {"name": "Jane", "age": "41", "address": {"city": "Shelbyville"}},
            "bad_schema_file": {"type": "widget"},
        }
        paths = {"temp_dir": temp_dir_path}

        for name, content in files.items():
            path = temp_dir_path / f"{name}.json"
            with open(path, "w", encoding="utf-8") as f:
                json.dump(content, f)
            paths[name] = path

        # Create a file with invalid JSON
        invalid_json_file = temp_dir_path / "invalid_json.json"
        with open(invalid_json_file, "w", encoding="utf-8") as f:
            f.write("{invalid json")
        paths["invalid_json_file"] = invalid_json_file

        yield paths


def run_main(*args):
    with mock.patch("sys.argv", ["schema_rules.py", *[str(arg) for arg in args]]):
        return main()


def test_load_json_valid(temp_files):
    """Test loading a valid JSON file."""
    data = load_json(temp_files["valid_data_file"])
    assert isinstance(data, dict)
    assert data["name"] == "John Doe"


def test_load_json_file_not_found():
    """Test loading a non-existent JSON file."""
    with pytest.raises(FileNotFoundError):
        load_json("non_existent.json")


def test_load_json_invalid_json(temp_files):
    """Test loading a file with invalid JSON."""
    with pytest.raises(json.JSONDecodeError) as exc_info:
        load_json(temp_files["invalid_json_file"])
    assert "invalid_json.json" in str(exc_info.value)


def test_load_sub_schemas(temp_files):
    """Test loading ID=PATH sub-schema definitions."""
    sub_schemas = load_sub_schemas([f"common.json#={temp_files['common_file']}"])
    assert list(sub_schemas) == ["common.json#"]
    assert "definitions" in sub_schemas["common.json#"]

    assert load_sub_schemas(None) == {}

    with pytest.raises(ValueError):
        load_sub_schemas(["no-separator"])


def test_parse_args():
    """Test parsing command line arguments."""
    args = parse_args(["data.json", "schema.json", "--sub-schema", "a#=a.json",
                       "--sub-schema", "b#=b.json", "--strict", "-v"])

    assert args.data_file == "data.json"
    assert args.schema_file == "schema.json"
    assert args.sub_schema == ["a#=a.json", "b#=b.json"]
    assert args.strict
    assert args.verbose
    assert not args.describe


def test_main_valid_data(temp_files):
    """Test main function with valid data."""
    exit_code = run_main(temp_files["valid_data_file"], temp_files["schema_file"],
                         "--sub-schema", f"common.json#={temp_files['common_file']}")
    assert exit_code == 0


def test_main_invalid_data(temp_files):
    """Test main function with invalid data."""
    exit_code = run_main(temp_files["invalid_data_file"], temp_files["schema_file"],
                         "--sub-schema", f"common.json#={temp_files['common_file']}")
    assert exit_code == 1


def test_main_strict(temp_files):
    """Test that --strict turns off conversion of the data."""
    sub_schema = f"common.json#={temp_files['common_file']}"

    assert run_main(temp_files["string_data_file"], temp_files["schema_file"],
                    "--sub-schema", sub_schema) == 0
    assert run_main(temp_files["string_data_file"], temp_files["schema_file"],
                    "--sub-schema", sub_schema, "--strict") == 1


def test_main_missing_sub_schema(temp_files):
    """Test main function when a $ref cannot be resolved."""
    # Without the registry the reference falls back to the root, which lacks it
    exit_code = run_main(temp_files["valid_data_file"], temp_files["schema_file"])
    assert exit_code == 1


def test_main_bad_sub_schema_definition(temp_files):
    """Test main function with a malformed --sub-schema value."""
    exit_code = run_main(temp_files["valid_data_file"], temp_files["schema_file"],
                         "--sub-schema", "no-separator")
    assert exit_code == 1


def test_main_untranslatable_schema(temp_files):
    """Test main function with a schema that cannot be translated."""
    exit_code = run_main(temp_files["valid_data_file"], temp_files["bad_schema_file"])
    assert exit_code == 1


def test_main_describe(temp_files, capsys):
    """Test printing the translated rule tree."""
    exit_code = run_main(temp_files["valid_data_file"], temp_files["schema_file"],
                         "--sub-schema", f"common.json#={temp_files['common_file']}",
                         "--describe")
    assert exit_code == 0

    description = json.loads(capsys.readouterr().out)
    assert description["type"] == "object"
    assert description["flags"]["label"] == "Test Schema"
    assert description["keys"]["name"]["flags"]["presence"] == "required"


def test_main_invalid_json(temp_files):
    """Test main function with invalid JSON."""
    exit_code = run_main(temp_files["invalid_json_file"], temp_files["schema_file"])
    assert exit_code == 1


def test_main_file_not_found(temp_files):
    """Test main function with non-existent file."""
    exit_code = run_main("non_existent.json", temp_files["schema_file"])
    assert exit_code == 1


def test_main_schema_not_found(temp_files):
    """Test main function with non-existent schema file."""
    exit_code = run_main(temp_files["valid_data_file"], "non_existent.json")
    assert exit_code == 1


def test_main_verbose(temp_files):
    """Test main function with verbose flag."""
    exit_code = main([str(temp_files["valid_data_file"]), str(temp_files["schema_file"]),
                      "--sub-schema", f"common.json#={temp_files['common_file']}",
                      "--verbose"])
    assert exit_code == 0


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
