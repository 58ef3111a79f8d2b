"""Tests for the edit session controller."""

import pytest

from flowbuilder.errors import FlowValidationError, NodeNotFoundError, SessionStateError
from flowbuilder.session.controller import LABEL_REQUIRED, EditSession
from flowbuilder.session.models import EditBuffer, SessionState


@pytest.fixture
def session(store) -> EditSession:
    return EditSession(store)


class TestOpening:
    def test_begin_add_resets_buffer(self, session):
        buffer = session.begin_add()

        assert session.state == SessionState.ADDING_NEW
        assert buffer == EditBuffer()

    def test_begin_edit_fills_buffer(self, session, store):
        node_id = store.add_node("B", "details")

        buffer = session.node_activated(node_id)

        assert session.state == SessionState.EDITING_EXISTING
        assert buffer == EditBuffer(
            id=node_id, label="B", description="details", is_edit_mode=True
        )

    def test_begin_edit_unknown_node(self, session):
        with pytest.raises(NodeNotFoundError):
            session.begin_edit("missing")

        assert session.state == SessionState.CLOSED
        assert session.buffer is None

    def test_cannot_open_twice(self, session):
        session.begin_add()

        with pytest.raises(SessionStateError):
            session.begin_edit("1")


class TestSave:
    def test_save_new_node(self, session, store):
        session.begin_add()
        session.update_buffer(label="B", description="desc")

        node_id = session.save()

        assert session.state == SessionState.CLOSED
        assert session.buffer is None
        assert store.get_node(node_id).data.description == "desc"

    def test_save_existing_node(self, session, store):
        session.begin_edit("1")
        session.update_buffer(label="Begin")

        session.save()

        node = store.get_node("1")
        assert node.data.label == "Begin"
        assert node.data.description == ""
        assert len(store) == 1

    @pytest.mark.parametrize("label", ["", "   ", "\t\n"])
    def test_blank_label_rejected(self, session, store, label):
        before = store.snapshot()
        session.begin_add()
        session.update_buffer(label=label)

        with pytest.raises(FlowValidationError) as exc_info:
            session.save()

        assert str(exc_info.value) == LABEL_REQUIRED
        assert session.error == LABEL_REQUIRED
        assert session.state == SessionState.ADDING_NEW
        assert store.snapshot() == before

    def test_error_cleared_after_fix(self, session):
        session.begin_edit("1")
        session.update_buffer(label=" ")
        with pytest.raises(FlowValidationError):
            session.save()

        session.update_buffer(label="Fixed")
        session.save()

        assert session.error == ""

    def test_update_of_vanished_node_is_noop(self, session, store):
        node_id = store.add_node("B")
        session.begin_edit(node_id)
        store.delete_node(node_id)
        before = store.snapshot()

        session.save()

        assert store.snapshot() == before
        assert session.state == SessionState.CLOSED
        assert node_id in session.error

    def test_failing_listener_still_closes_session(self, session, store):
        def broken(_store):
            raise RuntimeError("redraw failed")

        store.subscribe(broken)
        session.begin_add()
        session.update_buffer(label="B")

        session.save()

        assert session.state == SessionState.CLOSED
        assert len(store) == 2

    def test_label_is_stored_untrimmed(self, session, store):
        session.begin_add()
        session.update_buffer(label="  padded ")

        node_id = session.save()

        assert store.get_node(node_id).data.label == "  padded "


class TestCancel:
    def test_cancel_discards_buffer(self, session, store):
        before = store.snapshot()
        session.begin_edit("1")
        session.update_buffer(label="Changed")

        session.cancel()

        assert session.state == SessionState.CLOSED
        assert store.snapshot() == before

    def test_cancel_when_closed(self, session):
        with pytest.raises(SessionStateError):
            session.cancel()


class TestDelete:
    def test_delete_node_and_edges(self, session, store):
        b = store.add_node("B")
        store.connect_nodes("1", b)
        session.begin_edit("1")

        deleted = session.delete()

        assert deleted == "1"
        assert store.node_ids() == [b]
        assert store.edges == []
        assert session.state == SessionState.CLOSED

    def test_delete_not_offered_while_adding(self, session, store):
        session.begin_add()

        with pytest.raises(SessionStateError):
            session.delete()

        assert session.state == SessionState.ADDING_NEW
        assert store.node_ids() == ["1"]

    def test_delete_of_vanished_node_is_noop(self, session, store):
        node_id = store.add_node("B")
        session.begin_edit(node_id)
        store.delete_node(node_id)

        session.delete()

        assert session.state == SessionState.CLOSED
        assert store.node_ids() == ["1"]


class TestUpdateBuffer:
    def test_partial_update(self, session):
        session.begin_edit("1")

        buffer = session.update_buffer(description="more")

        assert buffer.label == "Start"
        assert buffer.description == "more"

    def test_update_when_closed(self, session):
        with pytest.raises(SessionStateError):
            session.update_buffer(label="x")
