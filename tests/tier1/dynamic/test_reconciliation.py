"""
Tier-1 tests for replicator reconciliation on attachment.

Pure in-memory: forms are built from plain payload dicts.
"""

from replicator.dynamic import Replicator
from replicator.forms import Form


def row_names(replicator):
    return [row.name for row in replicator.get_containers()]


# =========================================================================
# First render (form not submitted)
# =========================================================================


class TestDefaultCreation:

    def test_default_rows_created_in_order(self, make_form, row_factory):
        form = make_form()
        phones = form.add_dynamic("phones", row_factory, 3)
        assert row_names(phones) == ["0", "1", "2"]

    def test_zero_default_creates_nothing(self, make_form, row_factory):
        form = make_form()
        phones = form.add_dynamic("phones", row_factory)
        assert row_names(phones) == []

    def test_factory_called_once_per_row(self, make_form):
        seen = []
        form = make_form()
        form.add_dynamic("phones", seen.append, 2)
        assert [row.name for row in seen] == ["0", "1"]

    def test_factory_receives_attached_row(self, make_form):
        forms = []
        form = make_form()
        form.add_dynamic("phones", lambda row: forms.append(row.get_form()), 1)
        assert forms == [form]

    def test_rows_wait_for_attachment(self, row_factory):
        phones = Replicator(row_factory, 2)
        assert row_names(phones) == []

        form = Form("profile")
        form.add_component(phones, "phones")
        assert row_names(phones) == ["0", "1"]

    def test_attachment_through_detached_parent(self, row_factory):
        from replicator.forms import Container

        wrapper = Container()
        phones = Replicator(row_factory, 2)
        wrapper.add_component(phones, "phones")
        assert row_names(phones) == []

        form = Form("profile")
        form.add_component(wrapper, "contact")
        assert row_names(phones) == ["0", "1"]


# =========================================================================
# Postback (form submitted)
# =========================================================================


class TestReconstructionFromPayload:

    def test_rows_rebuilt_in_payload_order(self, make_form, row_factory):
        form = make_form({"phones": {"2": {"number": "a"}, "5": {"number": "b"}}})
        phones = form.add_dynamic("phones", row_factory)
        assert row_names(phones) == ["2", "5"]

    def test_rebuilt_rows_carry_submitted_values(self, make_form, row_factory):
        form = make_form({"phones": {"2": {"number": "a"}, "5": {"number": "b"}}})
        phones = form.add_dynamic("phones", row_factory)
        assert phones["2"]["number"].value == "a"
        assert phones["5"]["number"].value == "b"

    def test_default_count_ignored_on_postback(self, make_form, row_factory):
        form = make_form({"phones": {"0": {"number": "a"}}})
        phones = form.add_dynamic("phones", row_factory, 3)
        assert row_names(phones) == ["0"]

    def test_leaf_values_create_no_rows(self, make_form, row_factory):
        form = make_form({"phones": {"add": "Add", "note": "x"}})
        phones = form.add_dynamic("phones", row_factory, 2)
        assert row_names(phones) == []

    def test_empty_slice_creates_no_rows(self, make_form, row_factory):
        form = make_form({"phones": {}})
        phones = form.add_dynamic("phones", row_factory)
        assert row_names(phones) == []

    def test_missing_slice_creates_no_rows(self, make_form, row_factory):
        form = make_form({"email": "a@b.c"})
        phones = form.add_dynamic("phones", row_factory)
        assert row_names(phones) == []

    def test_leaf_at_replicator_path_is_ignored(self, make_form, row_factory):
        form = make_form({"phones": "garbage"})
        phones = form.add_dynamic("phones", row_factory)
        assert row_names(phones) == []

    def test_payload_slice_is_scoped_to_path(self, make_form, row_factory):
        form = make_form({
            "contact": {"phones": {"7": {"number": "1"}}},
            "phones": {"9": {"number": "2"}},
        })
        contact = form.add_container("contact")
        phones = contact.add_dynamic("phones", row_factory)
        assert row_names(phones) == ["7"]


class TestNestedReplicators:

    def test_nested_rows_rebuilt_from_payload(self, make_form, row_factory):
        def person_row(row):
            row.add_text("name")
            row.add_dynamic("phones", row_factory, 1)

        form = make_form({
            "people": {
                "0": {"name": "Ann", "phones": {"3": {"number": "1"}}},
                "4": {"name": "Bob", "phones": {}},
            },
        })
        people = form.add_dynamic("people", person_row)

        assert row_names(people) == ["0", "4"]
        assert row_names(people["0"]["phones"]) == ["3"]
        assert row_names(people["4"]["phones"]) == []

    def test_nested_defaults_on_first_render(self, make_form, row_factory):
        def person_row(row):
            row.add_text("name")
            row.add_dynamic("phones", row_factory, 2)

        form = make_form()
        people = form.add_dynamic("people", person_row, 2)

        for person in people.get_containers():
            assert row_names(person["phones"]) == ["0", "1"]


# =========================================================================
# force_default top-up
# =========================================================================


class TestForceTopUp:

    def test_tops_up_to_default_count(self, make_form, row_factory):
        form = make_form({"phones": {"0": {"number": "a"}}})
        phones = form.add_dynamic("phones", row_factory, 3, True)
        assert row_names(phones) == ["0", "1", "2"]

    def test_top_up_continues_after_highest_name(self, make_form, row_factory):
        form = make_form({"phones": {"4": {"number": "a"}}})
        phones = form.add_dynamic("phones", row_factory, 2, True)
        assert row_names(phones) == ["4", "5"]

    def test_never_removes_surplus_rows(self, make_form, row_factory):
        payload = {"phones": {str(i): {"number": str(i)} for i in range(4)}}
        form = make_form(payload)
        phones = form.add_dynamic("phones", row_factory, 2, True)
        assert row_names(phones) == ["0", "1", "2", "3"]

    def test_zero_default_with_force_creates_nothing(self, make_form, row_factory):
        form = make_form({"email": "a@b.c"})
        phones = form.add_dynamic("phones", row_factory, 0, True)
        assert row_names(phones) == []

    def test_force_on_first_render_uses_default_names(self, make_form, row_factory):
        form = make_form()
        phones = form.add_dynamic("phones", row_factory, 2, True)
        assert row_names(phones) == ["0", "1"]


# =========================================================================
# Idempotence
# =========================================================================


class TestIdempotentReconciliation:

    def test_reattachment_after_postback_adds_nothing(self, make_form, row_factory):
        form = make_form({"phones": {"2": {"number": "a"}, "5": {"number": "b"}}})
        phones = form.add_dynamic("phones", row_factory)

        form.remove_component(phones)
        form.add_component(phones, "phones")

        assert row_names(phones) == ["2", "5"]
        assert phones.created_names == ["2", "5"]

    def test_reattachment_on_first_render_adds_nothing(self, make_form, row_factory):
        form = make_form()
        phones = form.add_dynamic("phones", row_factory, 2)

        form.remove_component(phones)
        form.add_component(phones, "phones")

        assert row_names(phones) == ["0", "1"]

    def test_repeated_on_attach_call(self, make_form, row_factory):
        form = make_form({"phones": {"0": {"number": "a"}}})
        phones = form.add_dynamic("phones", row_factory, 3, True)

        phones.on_attach(form)

        assert row_names(phones) == ["0", "1", "2"]

    def test_removed_row_not_resurrected_on_reattach(self, make_form, row_factory):
        form = make_form({"phones": {"0": {"number": "a"}, "1": {"number": "b"}}})
        phones = form.add_dynamic("phones", row_factory)
        phones.remove(phones["1"])

        phones.on_attach(form)

        assert row_names(phones) == ["0"]


# =========================================================================
# Pre-filling with stored values
# =========================================================================


class TestSetValues:

    def test_set_values_creates_missing_rows(self, make_form, row_factory):
        form = make_form()
        phones = form.add_dynamic("phones", row_factory)

        phones.set_values({"3": {"number": "111"}, "8": {"number": "222"}})

        assert row_names(phones) == ["3", "8"]
        assert phones["8"]["number"].value == "222"

    def test_set_values_reuses_existing_rows(self, make_form, row_factory):
        form = make_form()
        phones = form.add_dynamic("phones", row_factory, 1)

        phones.set_values({"0": {"number": "111"}})

        assert row_names(phones) == ["0"]
        assert phones["0"]["number"].value == "111"

    def test_set_values_on_postback_does_not_create(self, make_form, row_factory):
        form = make_form({"phones": {"0": {"number": "a"}}})
        phones = form.add_dynamic("phones", row_factory)

        phones.set_values({"0": {"number": "x"}, "1": {"number": "y"}})

        assert row_names(phones) == ["0"]
        assert phones["0"]["number"].value == "x"
