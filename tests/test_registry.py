"""Tests for the program registry and the UserFacts schema."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from plaingov.errors import ProgramNotFoundError, RegistryConfigError
from plaingov.registry import DEFAULT_PROGRAMS, ProgramRegistry, build_default_registry
from plaingov.schemas.eligibility import UserFacts
from plaingov.schemas.programs import ProgramCategory, ProgramDescriptor, ProgramId

ALLOWED = frozenset({"www.canada.ca", "www.alberta.ca"})


def _descriptor(program_id: str = "test_program", url: str = "https://www.canada.ca/x.html") -> ProgramDescriptor:
    return ProgramDescriptor(
        id=program_id,
        name="Test Program",
        url=url,
        jurisdiction="Canada",
        category=ProgramCategory.BENEFITS,
    )


class TestDefaultRegistry:
    def test_five_programs_in_order(self):
        registry = build_default_registry(ALLOWED)
        assert registry.list_ids() == [p.value for p in ProgramId]

    def test_lookup(self):
        registry = build_default_registry(ALLOWED)
        afetc = registry.lookup("alberta_family_employment_tax_credit")
        assert afetc.jurisdiction == "Alberta"
        assert afetc.category == ProgramCategory.TAXES
        assert afetc.url.startswith("https://www.alberta.ca/")

    def test_unknown_id(self):
        registry = build_default_registry(ALLOWED)
        with pytest.raises(ProgramNotFoundError, match="Program nope not found"):
            registry.lookup("nope")

    def test_len(self):
        registry = build_default_registry(ALLOWED)
        assert len(registry) == len(DEFAULT_PROGRAMS)

    def test_descriptors_are_frozen(self):
        registry = build_default_registry(ALLOWED)
        with pytest.raises(ValidationError):
            registry.lookup("ccb").url = "https://example.com"


class TestRegistryValidation:
    def test_duplicate_id_rejected(self):
        with pytest.raises(RegistryConfigError, match="Duplicate"):
            ProgramRegistry([_descriptor(), _descriptor()], allowed_hosts=ALLOWED)

    def test_host_off_allow_list_rejected(self):
        with pytest.raises(RegistryConfigError, match="allow-list"):
            ProgramRegistry([_descriptor(url="https://example.com/gst.html")], allowed_hosts=ALLOWED)

    def test_plain_http_rejected(self):
        with pytest.raises(RegistryConfigError):
            ProgramRegistry([_descriptor(url="http://www.canada.ca/x.html")], allowed_hosts=ALLOWED)


class TestUserFacts:
    def test_camel_case_wire_names(self):
        facts = UserFacts.model_validate({"hasChildren": True, "childrenAges": [1, 3], "taxableSupplies": 5})
        assert facts.has_children is True
        assert facts.children_ages == [1.0, 3.0]
        assert facts.taxable_supplies == 5

    def test_absent_is_none(self):
        facts = UserFacts.model_validate({})
        assert facts.income is None
        assert facts.has_children is None

    def test_string_income_rejected(self):
        with pytest.raises(ValidationError):
            UserFacts.model_validate({"income": "45000"})

    def test_numeric_bool_rejected(self):
        with pytest.raises(ValidationError):
            UserFacts.model_validate({"hasChildren": 1})

    def test_unknown_keys_ignored(self):
        facts = UserFacts.model_validate({"income": 1, "favouriteColour": "blue"})
        assert facts.income == 1

    def test_field_label(self):
        assert UserFacts().field_label("children_ages") == "childrenAges"

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_numbers_rejected(self, value):
        with pytest.raises(ValidationError):
            UserFacts.model_validate({"income": value})
        with pytest.raises(ValidationError):
            UserFacts.model_validate({"childrenAges": [2, value]})
