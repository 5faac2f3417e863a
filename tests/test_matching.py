"""
Tests for attribute matching and instantiation.

These tests verify:
1. Exact, child and short-name matching rules
2. AND / OR semantics over spec lists
3. Declaration order is kept when filtering
4. Unloadable entries degrade to None instead of raising
"""

import sys
import types

import pytest

from attrquery import config
from attrquery.entries import attribute
from attrquery.matching.instantiator import instantiate, instantiate_all
from attrquery.matching.matcher import (
    MatchSpec,
    build_spec,
    build_specs,
    child_matching,
    filter_entries,
    has_all,
    has_any,
    matches,
)

import sampledata
from sampledata import (
    ChildAttribute,
    FirstAttribute,
    ParentAttribute,
    RepeatableAttribute,
    SecondAttribute,
    UnusedAttribute,
)


M = sampledata.__name__

ENTRIES = (
    attribute(FirstAttribute),
    attribute(SecondAttribute, 1),
    attribute(RepeatableAttribute, 0),
    attribute(RepeatableAttribute, 1),
    attribute(ChildAttribute, 1),
    attribute(sampledata.UNDECLARED_ATTRIBUTE),
)


# =============================================================================
# SPEC BUILDING TESTS
# =============================================================================

class TestBuildSpec:
    """Test normalization of classes and strings into MatchSpecs."""

    def test_class_spec(self):
        spec = build_spec(FirstAttribute)
        assert spec.target is FirstAttribute
        assert spec.short_name is None

    def test_loadable_dotted_name_becomes_target(self):
        assert build_spec(f"{M}.FirstAttribute").target is FirstAttribute

    def test_unloadable_name_becomes_short_name(self):
        spec = build_spec("pkg.missing.FirstAttribute")
        assert spec.target is None
        assert spec.short_name == "firstattribute"

    def test_short_name_is_case_folded(self):
        assert build_spec("fIrstAtTriBute").short_name == "firstattribute"

    @pytest.mark.parametrize("spec", [None, 42, "", "   ", object()])
    def test_unrecognized_specs(self, spec):
        assert build_spec(spec).recognized is False

    def test_match_spec_passes_through(self):
        spec = MatchSpec(target=FirstAttribute, match_children=False)
        assert build_spec(spec, match_children=True) is spec

    def test_build_specs_accepts_single_and_list(self):
        assert len(build_specs(FirstAttribute)) == 1
        assert len(build_specs([FirstAttribute, "SecondAttribute"])) == 2
        assert build_specs([]) == []

    def test_child_matching_default_from_config(self, monkeypatch):
        assert child_matching(None) is True
        monkeypatch.setattr(config, "MATCH_CHILD_ATTRIBUTES", False)
        assert child_matching(None) is False
        assert build_spec(ParentAttribute).match_children is False
        assert child_matching(True) is True


# =============================================================================
# SINGLE ENTRY TESTS
# =============================================================================

class TestMatches:
    """Test the per-entry matching rules."""

    def test_exact_match(self):
        assert matches(attribute(FirstAttribute), build_spec(FirstAttribute))

    def test_different_type_does_not_match(self):
        assert not matches(attribute(FirstAttribute), build_spec(SecondAttribute))

    def test_child_matches_parent_spec(self):
        assert matches(attribute(ChildAttribute, 1), build_spec(ParentAttribute))

    def test_strict_mode_rejects_child(self):
        spec = build_spec(ParentAttribute, match_children=False)
        assert not matches(attribute(ChildAttribute, 1), spec)
        assert matches(attribute(ParentAttribute), spec)

    def test_parent_does_not_match_child_spec(self):
        assert not matches(attribute(ParentAttribute), build_spec(ChildAttribute))

    def test_string_declared_entry_matches_class_spec(self):
        """Entries declared by name match the class they name."""
        entry = attribute(f"{M}.FirstAttribute")
        assert matches(entry, build_spec(FirstAttribute))

    def test_exact_identifier_is_case_sensitive(self):
        """Python names are case-sensitive; only short names fold case."""
        entry = attribute(f"{M}.firstattribute")
        assert not matches(entry, build_spec(FirstAttribute))

    def test_classes_differing_only_in_case_are_distinct(self):
        class Route:
            pass

        class ROUTE:
            pass

        assert matches(attribute(Route), build_spec(Route))
        assert not matches(attribute(Route), build_spec(ROUTE))
        assert not matches(attribute(ROUTE), build_spec(Route))

    def test_bare_name_of_builtin_type_also_matches_short_name(self):
        """A bare name that is also a builtin type still matches by short name."""
        spec = build_spec("filter")
        assert spec.target is filter
        assert spec.short_name == "filter"
        assert matches(attribute(sampledata.Filter), spec)
        assert matches(attribute(sampledata.Filter), build_spec("Filter"))

    def test_dotted_name_of_loadable_type_has_no_short_name(self):
        spec = build_spec(f"{M}.FirstAttribute")
        assert spec.short_name is None

    def test_short_name_matches_unloadable_entry(self):
        """Short names work even when the declared type does not exist."""
        entry = attribute(sampledata.UNDECLARED_ATTRIBUTE)
        assert matches(entry, build_spec("UndeclaredAttribute"))
        assert matches(entry, build_spec("undeclaredattribute"))

    def test_short_name_does_not_match_other_names(self):
        assert not matches(attribute(FirstAttribute), build_spec("FakeAttribute"))

    def test_unrecognized_spec_never_matches(self):
        assert not matches(attribute(FirstAttribute), build_spec(42))


# =============================================================================
# ENTRY LIST TESTS
# =============================================================================

class TestEntryLists:
    """Test AND/OR semantics over lists of specs."""

    def test_has_all_requires_every_spec(self):
        assert has_all(ENTRIES, build_specs([FirstAttribute, SecondAttribute]))
        assert not has_all(ENTRIES, build_specs([FirstAttribute, UnusedAttribute]))

    def test_has_all_with_empty_list_is_true(self):
        """Asking for nothing is trivially satisfied."""
        assert has_all(ENTRIES, []) is True

    def test_has_all_is_conjunction_of_singles(self):
        pair = [FirstAttribute, ParentAttribute]
        assert has_all(ENTRIES, build_specs(pair)) == all(
            has_all(ENTRIES, build_specs(spec)) for spec in pair
        )

    def test_adding_specs_never_turns_false_into_true(self):
        assert not has_all(ENTRIES, build_specs([UnusedAttribute]))
        assert not has_all(ENTRIES, build_specs([UnusedAttribute, FirstAttribute]))

    def test_has_any(self):
        assert has_any(ENTRIES, build_specs([UnusedAttribute, FirstAttribute]))
        assert not has_any(ENTRIES, build_specs([UnusedAttribute, "FakeAttribute"]))
        assert not has_any(ENTRIES, [])

    def test_filter_keeps_declaration_order(self):
        """Output order follows the declarations, not the requested order."""
        filtered = filter_entries(ENTRIES, build_specs([RepeatableAttribute, FirstAttribute]))
        assert [e.short_name for e in filtered] == [
            "FirstAttribute",
            "RepeatableAttribute",
            "RepeatableAttribute",
        ]

    def test_filter_lists_entry_matching_two_specs_once(self):
        filtered = filter_entries(ENTRIES, build_specs([ChildAttribute, ParentAttribute]))
        assert filtered == [attribute(ChildAttribute, 1)]


# =============================================================================
# INSTANTIATION TESTS
# =============================================================================

class TestInstantiator:
    """Test turning entries into attribute instances."""

    def test_instantiate_with_arguments(self):
        assert instantiate(attribute(SecondAttribute, 1)) == SecondAttribute(1)

    def test_instantiate_with_keywords(self):
        assert instantiate(attribute(SecondAttribute, id=7)) == SecondAttribute(id=7)

    def test_instantiate_by_name(self):
        assert instantiate(attribute(f"{M}.FirstAttribute")) == FirstAttribute()

    def test_unloadable_entry_gives_none(self):
        assert instantiate(attribute(sampledata.UNDECLARED_ATTRIBUTE)) is None

    def test_instantiate_all_drops_unloadable(self):
        assert instantiate_all(ENTRIES) == [
            FirstAttribute(),
            SecondAttribute(1),
            RepeatableAttribute(0),
            RepeatableAttribute(1),
            ChildAttribute(1),
        ]

    def test_constructor_errors_propagate(self):
        """A declaration with bad arguments is a bug in the declaration."""
        with pytest.raises(TypeError):
            instantiate(attribute(FirstAttribute, "unexpected"))

    def test_type_from_unloaded_module_gives_none(self, monkeypatch):
        """A name is only loadable while its module is imported."""
        module = types.ModuleType("attrquery_transient")
        module.Marker = type("Marker", (), {})
        monkeypatch.setitem(sys.modules, "attrquery_transient", module)

        entry = attribute("attrquery_transient.Marker")
        assert isinstance(instantiate(entry), module.Marker)

        monkeypatch.delitem(sys.modules, "attrquery_transient")
        assert instantiate(entry) is None
