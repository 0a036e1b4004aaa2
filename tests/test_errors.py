"""Tests for util.errors."""

from fastapi import HTTPException

from util.enums import ErrorMessage
from util.errors import AppError, ImmutableScope, NodeNotFound, StoreError, Unauthorized


def test_store_errors_share_base() -> None:
    assert issubclass(Unauthorized, StoreError)
    assert issubclass(ImmutableScope, StoreError)
    assert issubclass(NodeNotFound, StoreError)


def test_node_not_found_carries_location() -> None:
    err = NodeNotFound("alice", 7)
    assert err.owner == "alice"
    assert err.node_id == 7
    assert "alice/7" in str(err)
    assert err.http_status == 404


def test_immutable_scope_status() -> None:
    assert ImmutableScope("alice", 0).http_status == 409


def test_unauthorized_carries_requester() -> None:
    err = Unauthorized("alice", "mallory")
    assert err.requester == "mallory"
    assert err.node_id is None
    assert err.http_status == 403


def test_app_error_from_message() -> None:
    err = AppError.of(ErrorMessage.PAYLOAD_TOO_LARGE)
    assert isinstance(err, HTTPException)
    assert err.status_code == 413
    assert err.detail == "Node payload too large"


def test_transport_errors_use_client_error_statuses() -> None:
    assert AppError.of(ErrorMessage.ID_RANGE).status_code == 422
    assert ErrorMessage.PAYLOAD_TOO_LARGE.value.http_status == 413
