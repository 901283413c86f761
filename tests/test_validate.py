import json

import pytest

from llmapi.schema.definition import DataType, Definition
from llmapi.schema.validate import (
    SchemaValidationError,
    validate,
    verify_schema_and_unmarshal,
)


def _object_schema():
    return Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "integer": Definition(type=DataType.INTEGER),
            "number": Definition(type=DataType.NUMBER),
            "boolean": Definition(type=DataType.BOOLEAN),
            "array": Definition(
                type=DataType.ARRAY, items=Definition(type=DataType.NUMBER)
            ),
        },
        required=["string"],
    )


@pytest.mark.parametrize(
    "data,schema,expected",
    [
        ("ABC", Definition(type=DataType.STRING), True),
        (123, Definition(type=DataType.STRING), False),
        (123, Definition(type=DataType.INTEGER), True),
        (123.4, Definition(type=DataType.INTEGER), False),
        ("ABC", Definition(type=DataType.NUMBER), False),
        (123, Definition(type=DataType.NUMBER), True),
        (False, Definition(type=DataType.BOOLEAN), True),
        (123, Definition(type=DataType.BOOLEAN), False),
        (None, Definition(type=DataType.NULL), True),
        (0, Definition(type=DataType.NULL), False),
        (
            ["a", "b", "c"],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING)),
            True,
        ),
        (
            [1, 2, 3],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING)),
            False,
        ),
        (
            [1, 2, 3],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)),
            True,
        ),
        (
            [1, 2, 3.4],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)),
            False,
        ),
        (
            {
                "string": "abc",
                "integer": 123,
                "number": 123.4,
                "boolean": False,
                "array": [1, 2, 3],
            },
            _object_schema(),
            True,
        ),
        (
            {"integer": 123, "number": 123.4, "boolean": False, "array": [1, 2, 3]},
            _object_schema(),
            False,
        ),
    ],
)
def test_validate(data, schema, expected):
    assert validate(schema, data) is expected


def test_integral_float_counts_as_integer():
    assert validate(Definition(type=DataType.INTEGER), 5.0) is True


def test_bool_is_not_a_number():
    assert validate(Definition(type=DataType.NUMBER), True) is False
    assert validate(Definition(type=DataType.INTEGER), False) is False


def test_schema_without_type_rejects_everything():
    assert validate(Definition(), "anything") is False


def test_wrong_property_type_fails_object():
    schema = _object_schema()
    assert validate(schema, {"string": "abc", "integer": "x"}) is False


def test_unmarshal_object_with_optional_fields():
    schema = Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "number": Definition(type=DataType.NUMBER),
        },
    )
    content = b'{"string":"abc","number":123.4}'
    assert verify_schema_and_unmarshal(schema, content) == json.loads(content)


def test_unmarshal_missing_required_field_fails():
    schema = Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "number": Definition(type=DataType.NUMBER),
        },
        required=["string", "number"],
    )
    with pytest.raises(SchemaValidationError):
        verify_schema_and_unmarshal(schema, b'{"string":"abc"}')


def _integer_schema():
    return Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "integer": Definition(type=DataType.INTEGER),
        },
        required=["string", "integer"],
    )


def test_unmarshal_validates_integer():
    result = verify_schema_and_unmarshal(
        _integer_schema(), '{"string":"abc","integer":123}'
    )
    assert result == {"string": "abc", "integer": 123}


def test_unmarshal_integer_validation_failure():
    with pytest.raises(SchemaValidationError, match="data validation failed"):
        verify_schema_and_unmarshal(
            _integer_schema(), '{"string":"abc","integer":123.4}'
        )


def test_unmarshal_broken_json_raises_decode_error():
    with pytest.raises(json.JSONDecodeError):
        verify_schema_and_unmarshal(_integer_schema(), '{"string":')