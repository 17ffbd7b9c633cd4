"""Tests for union compatibility rules."""

from stricteq.kinds import (
    ARRAY, BOOL, CALLABLE, CLOSED_RESOURCE, FLOAT, INT, KEYED_ARRAY, LIST,
    NON_EMPTY_STRING, NULL, OBJECT, RESOURCE, STRING,
    named_object,
)
from stricteq.unions import (
    DominantScan, StringScan,
    homogeneous_compatible, nullable_string_compatible, scan_dominant, scan_strings,
    union_compatible,
)


class TestDominantScan:
    """Folding a union onto its widest member."""

    def test_single_member(self):
        assert scan_dominant([INT]) == DominantScan(INT)

    def test_widens_to_parent(self):
        assert scan_dominant([KEYED_ARRAY, LIST, ARRAY]) == DominantScan(ARRAY)

    def test_keeps_parent(self):
        assert scan_dominant([ARRAY, KEYED_ARRAY]) == DominantScan(ARRAY)

    def test_unrelated_members_break_uniformity(self):
        assert not scan_dominant([STRING, INT]).uniform

    def test_stays_broken(self):
        """Once broken, a later member cannot repair the walk."""
        assert not scan_dominant([STRING, INT, STRING]).uniform

    def test_continues_from_start_state(self):
        state = scan_dominant([NON_EMPTY_STRING], DominantScan(STRING))
        assert state == DominantScan(STRING)


class TestHomogeneousRule:

    def test_string_family(self):
        assert homogeneous_compatible([NON_EMPTY_STRING], [STRING, NON_EMPTY_STRING])

    def test_second_side_can_widen(self):
        assert homogeneous_compatible([NON_EMPTY_STRING], [STRING])

    def test_null_breaks_uniformity(self):
        assert not homogeneous_compatible([STRING], [STRING, NULL])

    def test_too_complicated_dominant_refused(self):
        assert not homogeneous_compatible([KEYED_ARRAY, ARRAY], [ARRAY])
        assert not homogeneous_compatible([named_object("A"), OBJECT], [OBJECT])

    def test_scalar_union_against_same_scalar(self):
        assert homogeneous_compatible([INT], [INT])
        assert not homogeneous_compatible([INT], [INT, FLOAT])


class TestStringScan:

    def test_plain_strings(self):
        assert scan_strings([STRING]) == StringScan(string_only=True, with_null=False)

    def test_non_empty_string_licenses_null(self):
        assert scan_strings([NON_EMPTY_STRING]).with_null

    def test_non_empty_string_anywhere(self):
        """with_null is recorded whatever the member order."""
        assert scan_strings([NON_EMPTY_STRING, STRING]).with_null
        assert scan_strings([STRING, NON_EMPTY_STRING]).with_null

    def test_non_string_member(self):
        assert not scan_strings([STRING, INT]).string_only


class TestNullableStringRule:

    def test_null_licensed_by_non_empty_string(self):
        assert nullable_string_compatible([NON_EMPTY_STRING], [STRING, NULL])

    def test_null_not_licensed_by_plain_string(self):
        assert not nullable_string_compatible([STRING], [STRING, NULL])

    def test_string_safe_kinds(self):
        others = [STRING, ARRAY, OBJECT, named_object("Foo"), CALLABLE, RESOURCE, CLOSED_RESOURCE]
        assert nullable_string_compatible([STRING], others)

    def test_scalars_refused(self):
        assert not nullable_string_compatible([STRING], [STRING, INT])
        assert not nullable_string_compatible([NON_EMPTY_STRING], [BOOL, NULL])

    def test_first_side_must_be_string_only(self):
        assert not nullable_string_compatible([STRING, NULL], [STRING])


class TestUnionCompatible:

    def test_symmetric(self):
        assert union_compatible([STRING, NULL], [NON_EMPTY_STRING])
        assert union_compatible([NON_EMPTY_STRING], [STRING, NULL])

    def test_mixed_union_never_safe(self):
        left = [STRING, INT]
        for right in ([STRING], [INT], [STRING, INT], [NULL], [OBJECT], [NON_EMPTY_STRING, NULL]):
            assert not union_compatible(left, right)
            assert not union_compatible(right, left)

    def test_string_against_object_or_null(self):
        assert union_compatible([NON_EMPTY_STRING], [named_object("Stringable"), NULL])
        assert not union_compatible([STRING], [named_object("Stringable"), NULL])
