from dataclasses import asdict, dataclass

import pytest

from klirr.typst import to_typst_fn, to_typst_value


@dataclass
class _Sample:
    name: str
    amount: int


def test_null_renders_as_none():
    assert to_typst_value(None) == "none"


def test_bool_renders_lowercase():
    assert to_typst_value(True) == "true"
    assert to_typst_value(False) == to_typst_value(True).replace("true", "false")


@pytest.mark.parametrize("text", ["abc", "Invoice no:", ""])
def test_string_is_quoted(text):
    result = to_typst_value(text)
    assert result.startswith('"') and result.endswith('"')
    assert result[1:-1] == text


def test_single_entry_enum_like_object_is_flattened_and_lowercased():
    assert to_typst_value({"Net": 30}) == "(\n  net: 30,\n)"


def test_single_entry_with_bool_keeps_key_case():
    result = to_typst_value({"Flag": True})
    assert "Flag: true" in result
    assert "flag" not in result


def test_single_entry_with_list_keeps_key_case():
    result = to_typst_value({"Items": [1]})
    assert "Items:" in result


def test_multi_entry_object_keeps_keys_and_order():
    result = to_typst_value({"Name": "x", "Amount": 2})
    assert "Name:" in result and "Amount:" in result
    assert result.index("Name:") < result.index("Amount:")
    assert result.startswith("(\n") and result.endswith(",\n)")


def test_array_has_one_line_per_item():
    values = [1, 2, 3, 4]
    result = to_typst_value(values)
    lines = result.split("\n")
    assert len(lines) == len(values) + 2
    assert all(line.startswith("  ") for line in lines[1:-1])


def test_nested_values_are_indented_deeper():
    result = to_typst_value({"a": {"b": 1, "c": 2}, "d": 3})
    lines = result.split("\n")
    assert "    b: 1" in lines
    assert "  d: 3" in lines
    assert "  )," in lines


def test_indent_applies_to_closing_paren():
    result = to_typst_value([1], indent=2)
    assert result.endswith("\n    )")


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        to_typst_value(object())


def test_to_typst_fn_wraps_in_provide_function():
    assert to_typst_fn(None) == "#let provide() = {\n  none\n}\n"


def test_to_typst_fn_contains_rendered_value():
    value = {"Name": "x", "Amount": 2}
    result = to_typst_fn(value)
    assert to_typst_value(value, 0) in result
    assert result.startswith("#let provide() = {\n")
    assert result.endswith("\n}\n")


def test_to_typst_fn_accepts_dataclass():
    sample = _Sample(name="Coffee", amount=3)
    assert to_typst_fn(sample) == to_typst_fn(asdict(sample))