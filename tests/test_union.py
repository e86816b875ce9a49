"""Tests for UnionShape dispatch."""

import pytest

from dataknobs_shapes import (
    ConstShape,
    EnumShape,
    Issue,
    NeverShape,
    NumberShape,
    ObjectShape,
    Shape,
    StringShape,
    UnionShape,
    ValueType,
    create_union_dispatch,
)


class SpyObjectShape(ObjectShape):
    """Object shape that counts how often it is applied."""

    def __init__(self, shapes):
        super().__init__(shapes)
        self.calls = 0

    def _apply(self, input, options):
        self.calls += 1
        return super()._apply(input, options)


def tagged(tag, **shapes):
    return ObjectShape({"type": ConstShape(tag), **shapes})


class TestUnionBuckets:
    """Test candidate bucket construction."""

    def test_buckets_by_type(self):
        """Test candidates are grouped by accepted type, any-bucket last."""
        number, string, anything = NumberShape(), StringShape(), Shape()
        dispatch = create_union_dispatch([number, string, anything])

        assert dispatch.buckets == {
            ValueType.NUMBER: [number, anything],
            ValueType.INTEGER: [number, anything],
            ValueType.STRING: [string, anything],
        }
        assert dispatch.any_bucket == [anything]
        assert dispatch.bucket_types == [
            ValueType.NUMBER,
            ValueType.INTEGER,
            ValueType.STRING,
            ValueType.ANY,
        ]

    def test_no_duplicates(self):
        """Test a candidate appears once per bucket."""
        number = NumberShape()
        dispatch = create_union_dispatch([number, number])
        assert dispatch.buckets[ValueType.NUMBER] == [number]

    def test_nested_unions_are_flattened(self):
        """Test unions without checks are unwrapped."""
        number, string = NumberShape(), StringShape()
        dispatch = create_union_dispatch([UnionShape([number]), UnionShape([string])])
        assert dispatch.buckets[ValueType.STRING] == [string]
        assert dispatch.buckets[ValueType.NUMBER] == [number]

    def test_checked_unions_are_opaque(self):
        """Test unions with checks are kept as candidates."""
        inner = UnionShape([NumberShape(), StringShape()]).refine(lambda value: value != 0)
        dispatch = create_union_dispatch([inner])
        assert dispatch.buckets[ValueType.STRING] == [inner]
        assert UnionShape([inner]).validate(0).issues[0].code == "union"

    def test_never_candidates_are_skipped(self):
        """Test a never shape joins no bucket."""
        dispatch = create_union_dispatch([NeverShape(), StringShape()])
        assert dispatch.bucket_types == [ValueType.STRING]


class TestUnionDispatch:
    """Test dispatching inputs to candidates."""

    def test_matching_candidate(self):
        """Test an input accepted by a candidate."""
        shape = UnionShape([NumberShape(), StringShape()])
        assert shape.parse("a") == "a"
        assert shape.parse(1) == 1

    def test_no_bucket(self):
        """Test an input type no candidate accepts."""
        shape = UnionShape([NumberShape(), StringShape()])
        assert shape.validate(True).issues == [
            Issue(
                code="union",
                path=[],
                input=True,
                message="Must conform the union",
                param={
                    "input_types": [ValueType.NUMBER, ValueType.INTEGER, ValueType.STRING],
                    "issue_groups": None,
                },
            )
        ]

    def test_all_candidates_fail(self):
        """Test one issue group per failed candidate."""
        shape = UnionShape([NumberShape().gt(5), NumberShape().lt(0)])
        issues = shape.validate(3).issues
        assert len(issues) == 1
        assert issues[0].code == "union"

        groups = issues[0].param["issue_groups"]
        assert [[issue.code for issue in group] for group in groups] == [["number_gt"], ["number_lt"]]

    def test_first_match_wins(self):
        """Test candidates are tried in order."""
        shape = UnionShape([
            NumberShape().gt(0).transform(lambda value: "first"),
            NumberShape().transform(lambda value: "second"),
        ])
        assert shape.parse(1) == "first"
        assert shape.parse(-1) == "second"

    def test_any_candidate_fallback(self):
        """Test any-type candidates are tried after specific ones."""
        shape = UnionShape([NumberShape().gt(5), Shape().transform(lambda value: "any")])
        assert shape.parse(10) == 10
        assert shape.parse(1) == "any"
        assert shape.parse(True) == "any"

    def test_union_checks_run_on_winner(self):
        """Test the union's own checks see the winning output."""
        shape = UnionShape([NumberShape(), StringShape()]).refine(lambda value: value != 0, "Zero")
        assert shape.parse("a") == "a"
        assert shape.validate(0).issues[0].message == "Zero"

    def test_coerced_candidate(self):
        """Test a coerced candidate widens the accepted types."""
        shape = UnionShape([ConstShape(True), NumberShape().coerce()])
        assert shape.parse("5") == 5
        assert shape.parse(True) is True
        assert shape.parse(False) == 0

    def test_at(self):
        """Test child lookup across candidates."""
        number, string = NumberShape(), StringShape()
        shape = UnionShape([ObjectShape({"a": number}), ObjectShape({"a": string, "b": number})])

        assert isinstance(shape.at("a"), UnionShape)
        assert shape.at("a").shapes == (number, string)
        assert shape.at("b") is number
        assert shape.at("c") is None

    def test_input_types(self):
        """Test the union accepts what its candidates accept."""
        assert UnionShape([StringShape(), NumberShape()]).input_types == [
            ValueType.STRING,
            ValueType.NUMBER,
            ValueType.INTEGER,
        ]
        assert UnionShape([StringShape(), Shape()]).input_types == [ValueType.ANY]
        assert UnionShape([]).input_types == [ValueType.NEVER]

    def test_non_shape_candidate(self):
        """Test candidates must be shapes."""
        with pytest.raises(TypeError):
            UnionShape([NumberShape(), 1])


class TestDiscriminator:
    """Test discriminated dispatch."""

    def test_discriminated_candidate_only(self):
        """Test the discriminated candidate is applied directly."""
        a = SpyObjectShape({"type": ConstShape("a")})
        b = SpyObjectShape({"type": ConstShape("b")})
        shape = UnionShape([a, b])
        value = {"type": "b"}

        assert shape.parse(value) is value
        assert shape.dispatch.discriminator.key == "type"
        assert a.calls == 0
        assert b.calls == 1

    def test_enum_literals(self):
        """Test enums provide literal sets."""
        shape = UnionShape([
            ObjectShape({"kind": EnumShape(["x", "y"])}),
            ObjectShape({"kind": EnumShape(["z"])}),
        ])
        assert shape.dispatch.discriminator is not None
        assert shape.dispatch.discriminator.key == "kind"

    def test_overlapping_literals(self):
        """Test overlapping literal sets disable the discriminator."""
        shape = UnionShape([
            ObjectShape({"kind": EnumShape(["x", "y"])}),
            ObjectShape({"kind": ConstShape("y")}),
        ])
        assert shape.dispatch.discriminator is None

    def test_numbers_overlap_across_types(self):
        """Test 1 and 1.0 are the same literal."""
        shape = UnionShape([tagged(1), tagged(1.0)])
        assert shape.dispatch.discriminator is None

    def test_booleans_are_distinct_from_numbers(self):
        """Test True and 1 are different literals."""
        shape = UnionShape([tagged(True, x=NumberShape()), tagged(1, x=StringShape())])
        assert shape.dispatch.discriminator is not None
        assert shape.parse({"type": 1, "x": "s"}) == {"type": 1, "x": "s"}
        assert not shape.validate({"type": True, "x": "s"})

    def test_missing_key(self):
        """Test a candidate without the key disables the discriminator."""
        shape = UnionShape([tagged("a"), ObjectShape({"other": ConstShape("b")})])
        assert shape.dispatch.discriminator is None

    def test_non_object_candidate(self):
        """Test a candidate accepting other types disables the discriminator."""
        shape = UnionShape([tagged("a"), StringShape()])
        assert shape.dispatch.discriminator is None

    def test_second_key(self):
        """Test any key of the first candidate may discriminate."""
        shape = UnionShape([
            ObjectShape({"name": StringShape(), "type": ConstShape("a")}),
            ObjectShape({"type": ConstShape("b"), "name": StringShape()}),
        ])
        assert shape.dispatch.discriminator.key == "type"

    @pytest.mark.parametrize(
        "value",
        [
            {"type": "a", "x": 1},
            {"type": "a", "x": "bad"},
            {"type": "b", "y": "s"},
            {"type": "b", "y": 2},
            {"type": "c"},
            {"type": ["unhashable"]},
            {},
            "not an object",
            None,
        ],
    )
    @pytest.mark.parametrize("verbose", [False, True])
    def test_equivalent_to_bucket_trial(self, value, verbose):
        """Test discriminated and plain dispatch give identical results."""
        candidates = [
            tagged("a", x=NumberShape()),
            tagged("b", y=StringShape()),
        ]
        discriminated = UnionShape(candidates)
        plain = UnionShape(candidates)
        plain.dispatch.discriminator = None

        assert discriminated.dispatch.discriminator is not None
        assert discriminated.validate(value, verbose=verbose) == plain.validate(value, verbose=verbose)
