"""Tests for staged member edits and late asynchronous results."""

import random

import pytest

from modules.group_editor.domain.models import Status
from modules.group_editor.state_machine import GroupEditor

pytestmark = pytest.mark.unit


def assert_invariants(editor):
    adds, removes = set(editor.pending_adds), set(editor.pending_removes)
    assert adds.isdisjoint(removes)
    assert len(set(editor.display_list)) == len(editor.display_list)
    existing = set(editor.existing_members or [])
    assert removes <= existing


class TestAddMember:
    def test_add_stages_and_displays(self, create_editor, member_factory):
        x = member_factory(1)

        assert create_editor.add_member(x) is True
        assert create_editor.pending_adds == [x]
        assert create_editor.display_list == [x]

    def test_duplicate_add_is_ignored(self, create_editor, member_factory):
        create_editor.add_member(member_factory(1, raw_member_id=10))

        assert create_editor.add_member(member_factory(1, raw_member_id=11)) is False
        assert [m.raw_member_id for m in create_editor.pending_adds] == [10]

    def test_add_of_existing_member_is_ignored(self, edit_editor_factory, member_factory):
        a = member_factory(1)
        editor = edit_editor_factory(existing=[a])

        assert editor.add_member(a) is False
        assert editor.pending_adds == []

    def test_add_outside_editing_is_ignored(self, collaborators, member_factory):
        editor = GroupEditor.for_edit("content://com.android.contacts/groups/7", collaborators)
        editor.start()

        assert editor.status == Status.LOADING
        assert editor.add_member(member_factory(1)) is False
        assert editor.pending_adds == []


class TestRemoveMember:
    def test_add_then_remove_of_new_member_is_a_no_op(self, edit_editor_factory, member_factory):
        a, m = member_factory(1), member_factory(2)
        editor = edit_editor_factory(existing=[a])

        editor.add_member(m)
        editor.remove_member(m)

        assert editor.pending_adds == []
        assert editor.pending_removes == []
        assert editor.display_list == [a]

    def test_remove_existing_then_add_undoes_removal(self, edit_editor_factory, member_factory):
        a, b, c = member_factory(1), member_factory(2), member_factory(3)
        editor = edit_editor_factory(existing=[a, b, c])

        editor.remove_member(b)
        assert editor.pending_removes == [b]
        assert editor.display_list == [a, c]

        editor.add_member(b)
        assert editor.pending_removes == []
        assert editor.pending_adds == []
        assert editor.display_list == [a, b, c]

    def test_remove_of_absent_member_is_ignored(self, edit_editor_factory, member_factory):
        editor = edit_editor_factory(existing=[member_factory(1)])

        assert editor.remove_member(member_factory(2)) is False
        assert editor.pending_removes == []

    def test_remove_twice_stages_once(self, edit_editor_factory, member_factory):
        a = member_factory(1)
        editor = edit_editor_factory(existing=[a])

        assert editor.remove_member(a) is True
        assert editor.remove_member(a) is False
        assert editor.pending_removes == [a]

    def test_remove_before_members_arrive_cannot_stage_removal(
        self, edit_editor_factory, member_factory
    ):
        editor = edit_editor_factory(existing=None)

        assert editor.remove_member(member_factory(1)) is False
        assert editor.pending_removes == []

    def test_remove_of_add_that_server_already_has(
        self, edit_editor_factory, members_source, member_factory
    ):
        a = member_factory(1)
        editor = edit_editor_factory(existing=None)
        editor.add_member(a)
        members_source.deliver([a])

        assert editor.display_list == [a]

        editor.remove_member(a)

        assert editor.pending_adds == []
        assert editor.pending_removes == [a]
        assert editor.display_list == []


class TestInvariants:
    def test_random_edit_sequences_keep_invariants(self, edit_editor_factory, member_factory):
        pool = [member_factory(i) for i in range(1, 9)]
        editor = edit_editor_factory(existing=pool[:4])
        rng = random.Random(1234)

        for _ in range(300):
            member = rng.choice(pool)
            if rng.random() < 0.5:
                editor.add_member(member)
            else:
                editor.remove_member(member)
            assert_invariants(editor)

    def test_members_arriving_after_edits_use_current_pending_lists(
        self, edit_editor_factory, members_source, member_factory
    ):
        a, b, x, y = (member_factory(i) for i in (1, 2, 3, 4))
        editor = edit_editor_factory(existing=None)

        editor.add_member(x)
        editor.add_member(y)
        editor.remove_member(y)
        assert editor.display_list == [x]

        members_source.deliver([a, b])

        assert editor.display_list == [a, b, x]
        assert_invariants(editor)

    def test_interleaved_arrivals_never_duplicate(
        self, edit_editor_factory, members_source, member_factory
    ):
        a, b = member_factory(1), member_factory(2)
        editor = edit_editor_factory(existing=None)

        editor.add_member(a)
        members_source.deliver([a, b])

        assert editor.display_list == [a, b]
        assert_invariants(editor)


class TestSuggestions:
    def test_picked_suggestion_is_added(self, create_editor, contact_lookup, member_factory):
        m = member_factory(5)

        assert create_editor.add_member_from_suggestion(50, "5") is True
        assert contact_lookup.calls[0][:2] == (50, "5")

        contact_lookup.deliver(m)

        assert create_editor.display_list == [m]
        assert create_editor.suggestion_exclusions() == {5}

    def test_newer_pick_supersedes_older_lookup(self, create_editor, contact_lookup, member_factory):
        first, second = member_factory(5), member_factory(6)
        create_editor.add_member_from_suggestion(50, "5")
        create_editor.add_member_from_suggestion(60, "6")

        contact_lookup.deliver(first, index=0)
        assert create_editor.display_list == []

        contact_lookup.deliver(second, index=1)
        assert create_editor.display_list == [second]

    def test_unresolved_contact_is_ignored(self, create_editor, contact_lookup):
        create_editor.add_member_from_suggestion(50, "5")
        contact_lookup.deliver(None)

        assert create_editor.pending_adds == []
        assert create_editor.status == Status.EDITING

    def test_lookup_result_after_revert_is_dropped(
        self, create_editor, contact_lookup, member_factory
    ):
        create_editor.add_member_from_suggestion(50, "5")
        create_editor.request_revert()

        contact_lookup.deliver(member_factory(5))

        assert create_editor.status == Status.CLOSING
        assert create_editor.pending_adds == []


class TestLateResults:
    def test_members_after_commit_are_discarded(
        self, edit_editor_factory, members_source, save_service, member_factory
    ):
        x = member_factory(3)
        editor = edit_editor_factory(existing=None)
        editor.add_member(x)

        assert editor.request_commit() is True
        assert len(save_service.requests) == 1

        members_source.deliver([member_factory(1), member_factory(2)])

        assert editor.existing_members is None
        assert editor.display_list == [x]
        assert editor.pending_adds == [x]

    def test_metadata_after_revert_is_discarded(self, collaborators, metadata_source, metadata):
        editor = GroupEditor.for_edit("content://com.android.contacts/groups/7", collaborators)
        editor.start()
        editor.request_revert()
        metadata_source.deliver(metadata)

        assert editor.status == Status.CLOSING
        assert editor.name == ""
