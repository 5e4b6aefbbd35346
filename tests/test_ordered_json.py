"""
Unit tests for the order-preserving JSON model.

These tests use only the Python standard library (unittest).
"""

from __future__ import annotations

import json
import unittest

from ordered_json.model import OrderedObject, ParseError, key_paths, parse_ordered, serialize
from ordered_json.standard import dumps_standard, from_standard_value, to_standard_value


MOVIE = '{"title":"Inception","genre":"Sci-Fi","locations":["A","B"]}'


def _pair_keys(text: str) -> list[str]:
    """Top-level keys in textual order, read without any dict in between."""

    return [k for k, _ in json.loads(text, object_pairs_hook=lambda pairs: pairs)]


class TestOrderPreservation(unittest.TestCase):
    """Member order survives parse -> serialize at every depth."""

    def test_hundreds_of_top_level_keys(self) -> None:
        keys = [f"k{(i * 7919) % 1000:03d}" for i in range(300)]
        text = "{" + ", ".join(f'"{k}": {i}' for i, k in enumerate(keys)) + "}"

        tree = parse_ordered(text)
        self.assertEqual(list(tree.keys()), keys)
        self.assertEqual(_pair_keys(serialize(tree)), keys)

    def test_deep_nesting_keeps_order_at_each_level(self) -> None:
        depth = 12
        text = '"leaf"'
        for level in range(depth):
            text = f'{{"z{level}": {level}, "a{level}": {text}, "m{level}": [{level}]}}'

        tree = parse_ordered(text)
        out = parse_ordered(serialize(tree))
        self.assertEqual(out, tree)

        node = out
        for level in reversed(range(depth)):
            self.assertEqual(list(node.keys()), [f"z{level}", f"a{level}", f"m{level}"])
            node = node[f"a{level}"]
        self.assertEqual(node, "leaf")

    def test_objects_inside_arrays(self) -> None:
        tree = parse_ordered('[{"b": 1, "a": 2}, {"y": {"d": 0, "c": 1}}]')
        self.assertEqual(list(tree[0].keys()), ["b", "a"])
        self.assertEqual(list(tree[1]["y"].keys()), ["d", "c"])
        self.assertEqual(serialize(tree), '[{"b":1,"a":2},{"y":{"d":0,"c":1}}]')


class TestRoundTrip(unittest.TestCase):
    """serialize(parse_ordered(text)) parses back to an equal, equally ordered tree."""

    def test_all_value_kinds(self) -> None:
        text = """
        {
            "null": null,
            "yes": true,
            "no": false,
            "int": -42,
            "big": 123456789012345678901234567890,
            "float": 6.02214076e23,
            "small": -1.5e-7,
            "escapes": "quote \\" backslash \\\\ newline \\n tab \\t \\u00e9 \\ud83d\\ude00",
            "nested": [1, [2, [3, {"k": "v"}]], {"z": [], "a": {}}]
        }
        """
        tree = parse_ordered(text)
        again = parse_ordered(serialize(tree))

        self.assertEqual(again, tree)
        self.assertEqual(again["big"], 123456789012345678901234567890)
        self.assertIsInstance(again["int"], int)
        self.assertEqual(again["float"], 6.02214076e23)
        self.assertEqual(again["escapes"], 'quote " backslash \\ newline \n tab \t é \U0001F600')
        self.assertEqual(list(again["nested"][2].keys()), ["z", "a"])

    def test_non_ascii_kept_verbatim(self) -> None:
        self.assertEqual(serialize(parse_ordered('{"city": "Köln"}')), '{"city":"Köln"}')

    def test_whitespace_is_not_preserved(self) -> None:
        self.assertEqual(serialize(parse_ordered('{ "a" : [ 1 , 2 ] }')), '{"a":[1,2]}')

    def test_indent_for_display(self) -> None:
        tree = parse_ordered('{"b": 1, "a": 2}')
        self.assertEqual(serialize(tree, indent=2), '{\n  "b": 1,\n  "a": 2\n}')

    def test_reordered_document_is_not_equal(self) -> None:
        self.assertNotEqual(parse_ordered('{"a": 1, "b": 2}'), parse_ordered('{"b": 2, "a": 1}'))


class TestBuilder(unittest.TestCase):
    """Ordered-insertion API."""

    def test_chained_set_declares_order(self) -> None:
        doc = OrderedObject().set("title", "Inception").set("genre", "Sci-Fi").set("locations", ["A", "B"])
        self.assertEqual(serialize(doc), MOVIE)

    def test_key_update_preserves_position(self) -> None:
        tree = parse_ordered('{"a":1,"b":2}')
        tree.set("a", 9)
        self.assertEqual(list(tree.keys()), ["a", "b"])
        self.assertEqual(serialize(tree), '{"a":9,"b":2}')

    def test_new_key_appends(self) -> None:
        tree = parse_ordered('{"b":1}').set("a", 2)
        self.assertEqual(list(tree.keys()), ["b", "a"])

    def test_non_string_key_rejected(self) -> None:
        with self.assertRaises(TypeError):
            OrderedObject().set(1, "x")  # type: ignore[arg-type]

    def test_duplicate_keys_keep_first_position_and_last_value(self) -> None:
        tree = parse_ordered('{"a": 1, "b": 2, "a": 3}')
        self.assertEqual(list(tree.keys()), ["a", "b"])
        self.assertEqual(tree["a"], 3)


class TestParseErrors(unittest.TestCase):
    """Malformed input surfaces a located ParseError and no tree."""

    def test_location_reported(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            parse_ordered('{\n  "a": tru\n}')
        err = ctx.exception
        self.assertEqual(err.lineno, 2)
        self.assertEqual(err.colno, 8)
        self.assertEqual(err.pos, 9)
        self.assertIn("line 2", str(err))

    def test_empty_and_truncated(self) -> None:
        for text in ["", "   ", '{"a": 1', "[1, 2", '{"a" 1}']:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_ordered(text)

    def test_non_standard_constants_rejected(self) -> None:
        for text in ['{"a": NaN}', "[Infinity]", "-Infinity"]:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_ordered(text)

    def test_overflowing_numbers_rejected(self) -> None:
        for text in ['{"x": 1e400}', "[-1e309]", "1.7976931348623159e308"]:
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as ctx:
                    parse_ordered(text)
                self.assertIn("out of range", ctx.exception.msg)

    def test_largest_double_accepted(self) -> None:
        self.assertEqual(parse_ordered("[1.7976931348623157e308]"), [1.7976931348623157e308])

    def test_unpaired_surrogates_rejected(self) -> None:
        for text in ['"\\ud800"', '{"k": "a\\udfff"}', '{"\\ud83d": 1}', '["\ud800"]']:
            with self.subTest(text=ascii(text)):
                with self.assertRaises(ParseError):
                    parse_ordered(text)

    def test_paired_surrogate_escape_accepted(self) -> None:
        self.assertEqual(serialize(parse_ordered('["\\ud83d\\ude00"]')), '["\U0001F600"]')

    def test_parse_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_ordered("{oops}")

    def test_non_string_input(self) -> None:
        with self.assertRaises(TypeError):
            parse_ordered(b'{"a": 1}')  # type: ignore[arg-type]

    def test_serialize_rejects_non_finite(self) -> None:
        with self.assertRaises(ValueError):
            serialize(OrderedObject().set("x", float("nan")))


class TestStandardConversion(unittest.TestCase):
    """The standard path erases source order; the ordered path keeps it."""

    def test_normalized_path_does_not_keep_source_order(self) -> None:
        tree = parse_ordered(MOVIE)
        standard = to_standard_value(tree)

        self.assertEqual(json.loads(dumps_standard(standard)), json.loads(MOVIE))
        self.assertNotEqual(list(standard.keys()), ["title", "genre", "locations"])
        self.assertNotEqual(_pair_keys(dumps_standard(standard)), ["title", "genre", "locations"])

    def test_standard_objects_are_plain_dicts(self) -> None:
        standard = to_standard_value(parse_ordered('{"b": {"d": 1}, "a": [{"c": 2}]}'))
        self.assertIs(type(standard), dict)
        self.assertIs(type(standard["b"]), dict)
        self.assertIs(type(standard["a"][0]), dict)

    def test_standard_order_ignores_insertion_order(self) -> None:
        one = to_standard_value(parse_ordered('{"bb": 1, "a": 2, "c": 3}'))
        two = to_standard_value(parse_ordered('{"c": 3, "bb": 1, "a": 2}'))
        self.assertEqual(list(one.keys()), list(two.keys()))
        self.assertEqual(dumps_standard(one), dumps_standard(two))

    def test_from_standard_value_is_deterministic(self) -> None:
        value = {"b": 1, "a": {"d": 2, "c": 3}, "l": [{"y": 1, "x": 2}]}
        tree = from_standard_value(value)

        self.assertIsInstance(tree, OrderedObject)
        self.assertEqual(list(tree.keys()), ["b", "a", "l"])
        self.assertEqual(list(tree["a"].keys()), ["d", "c"])
        self.assertEqual(list(tree["l"][0].keys()), ["y", "x"])
        self.assertEqual(from_standard_value(value), tree)

    def test_standard_round_trip_keeps_values(self) -> None:
        tree = parse_ordered('{"n": null, "f": 1.25, "s": "x", "l": [true, false]}')
        back = from_standard_value(to_standard_value(tree))
        self.assertEqual(dict(back), dict(tree))


class TestKeyPaths(unittest.TestCase):
    def test_paths_in_iteration_order(self) -> None:
        tree = parse_ordered('{"movies": [{"title": "x", "genre": "y"}], "a/b": {"~": 1}}')
        self.assertEqual(
            key_paths(tree),
            ["/movies", "/movies/0/title", "/movies/0/genre", "/a~1b", "/a~1b/~0"],
        )

    def test_scalars_have_no_paths(self) -> None:
        self.assertEqual(key_paths(parse_ordered("[1, 2, 3]")), [])


if __name__ == "__main__":
    unittest.main()
